"""
Serializers for support tickets and clinic support messages.
"""

from rest_framework import serializers

from support.domain.support_message import MessageStatus


class TicketReplySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    ticketId = serializers.UUIDField(source="ticket_id")
    message = serializers.CharField()
    userId = serializers.UUIDField(source="user_id", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")


class TicketSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    reference = serializers.CharField()
    serial = serializers.CharField()
    hardwareId = serializers.CharField(source="hardware_id")
    deviceName = serializers.CharField(source="device_name")
    systemVersion = serializers.CharField(source="system_version")
    phoneNumber = serializers.CharField(source="phone_number")
    appVersion = serializers.CharField(source="app_version")
    description = serializers.CharField()
    status = serializers.CharField(source="status.value")
    licenseId = serializers.UUIDField(source="license_id", allow_null=True)
    adminReply = serializers.CharField(source="admin_reply", allow_null=True)
    replyAt = serializers.DateTimeField(source="reply_at", allow_null=True)
    replies = TicketReplySerializer(many=True)
    createdAt = serializers.DateTimeField(source="created_at")


class OpenTicketRequestSerializer(serializers.Serializer):
    serial = serializers.CharField(allow_blank=True, max_length=64)
    hardwareId = serializers.CharField(allow_blank=True, max_length=255)
    deviceName = serializers.CharField(allow_blank=True, max_length=255)
    systemVersion = serializers.CharField(allow_blank=True, max_length=100)
    phoneNumber = serializers.CharField(allow_blank=True, max_length=50)
    appVersion = serializers.CharField(allow_blank=True, max_length=50)
    description = serializers.CharField(allow_blank=True)


class ReplyRequestSerializer(serializers.Serializer):
    message = serializers.CharField(allow_blank=True)


class SupportMessageSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    clinicId = serializers.UUIDField(source="clinic_id")
    clinicName = serializers.CharField(source="clinic_name")
    accountCode = serializers.CharField(source="account_code", allow_null=True)
    message = serializers.CharField()
    source = serializers.CharField()
    status = serializers.CharField(source="status.value")
    createdAt = serializers.DateTimeField(source="created_at")
    readAt = serializers.DateTimeField(source="read_at", allow_null=True)
    closedAt = serializers.DateTimeField(source="closed_at", allow_null=True)


class SubmitSupportMessageRequestSerializer(serializers.Serializer):
    clinicId = serializers.UUIDField()
    clinicName = serializers.CharField(allow_blank=True, max_length=255)
    accountCode = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    message = serializers.CharField(allow_blank=True)


class SupportInboxSerializer(serializers.Serializer):
    messages = SupportMessageSerializer(many=True)
    unreadCount = serializers.IntegerField(source="unread_count")


class SupportMessageQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s.value for s in MessageStatus], required=False)
    clinicId = serializers.UUIDField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class SupportMessageStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s.value for s in MessageStatus])
