"""
Serializers for audit and traffic log endpoints.
"""

from rest_framework import serializers


class AuditLogSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    userId = serializers.UUIDField(source="user_id", allow_null=True)
    action = serializers.CharField()
    details = serializers.CharField()
    ipAddress = serializers.CharField(source="ip_address", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")


class AuditLogQuerySerializer(serializers.Serializer):
    action = serializers.CharField(required=False, allow_blank=True)
    userId = serializers.UUIDField(required=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=1000, default=200)


class TrafficLogSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    method = serializers.CharField()
    endpoint = serializers.CharField()
    status = serializers.IntegerField()
    serial = serializers.CharField(allow_null=True)
    hardwareId = serializers.CharField(source="hardware_id", allow_null=True)
    ipAddress = serializers.CharField(source="ip_address", allow_null=True)
    userAgent = serializers.CharField(source="user_agent", allow_null=True)
    payload = serializers.JSONField(allow_null=True)
    response = serializers.JSONField(allow_null=True)
    duration = serializers.FloatField(source="duration_ms", allow_null=True)
    timestamp = serializers.DateTimeField()


class TrafficLogQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=50)
    method = serializers.CharField(required=False, allow_blank=True)
    status = serializers.IntegerField(required=False)
    endpoint = serializers.CharField(required=False, allow_blank=True)
    serial = serializers.CharField(required=False, allow_blank=True)
    hardwareId = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True)
    startDate = serializers.DateTimeField(required=False)
    endDate = serializers.DateTimeField(required=False)


class PageMetaSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    totalPages = serializers.IntegerField(source="total_pages")


class TrafficLogPageSerializer(serializers.Serializer):
    data = TrafficLogSerializer(many=True)
    meta = PageMetaSerializer()
