"""
Serializers for notification endpoints.
"""

from rest_framework import serializers


class NotificationSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    body = serializers.CharField()
    targetSerial = serializers.CharField(source="target_serial", allow_null=True)
    channel = serializers.CharField(source="channel.value")
    productType = serializers.CharField(source="product_type.value")
    sentAt = serializers.DateTimeField(source="sent_at")


class SendNotificationRequestSerializer(serializers.Serializer):
    """Broadcast when targetSerial is empty, direct otherwise."""

    title = serializers.CharField(max_length=200)
    body = serializers.CharField()
    targetSerial = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
