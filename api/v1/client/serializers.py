"""
Serializers for endpoints called by installed POS and clinic software.

Field presence is checked by the domain so that the client sees the same
messages on every surface; these serializers only coerce types.
"""

from rest_framework import serializers

from api.v1.licenses.serializers import PlanSummarySerializer
from api.v1.plans.serializers import MONEY, PlanPriceSerializer


class ActivateRequestSerializer(serializers.Serializer):
    serial = serializers.CharField(required=False, allow_blank=True, default="")
    hardwareId = serializers.CharField(required=False, allow_blank=True, default="")
    deviceName = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    appVersion = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ActivateResponseSerializer(serializers.Serializer):
    success = serializers.SerializerMethodField()
    activationDate = serializers.DateTimeField(source="activation_date", allow_null=True)
    message = serializers.CharField()

    def get_success(self, obj) -> bool:
        return True


class ValidateRequestSerializer(serializers.Serializer):
    serial = serializers.CharField(required=False, allow_blank=True, default="")


class ValidationResponseSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    status = serializers.CharField(allow_null=True)
    isPaused = serializers.BooleanField(source="is_paused")
    expireDate = serializers.DateTimeField(source="expire_date", allow_null=True)
    daysLeft = serializers.IntegerField(source="days_left")
    licenseId = serializers.UUIDField(source="license_id", allow_null=True)
    plan = PlanSummarySerializer(allow_null=True)


class HeartbeatRequestSerializer(serializers.Serializer):
    serial = serializers.CharField(required=False, allow_blank=True, default="")
    hardwareId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    appVersion = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    deviceName = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class HeartbeatResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    timestamp = serializers.DateTimeField()


class UpdateCheckSerializer(serializers.Serializer):
    hasUpdate = serializers.BooleanField(source="has_update")
    version = serializers.CharField(allow_null=True)
    downloadUrl = serializers.CharField(source="download_url", allow_null=True)
    releaseNotes = serializers.CharField(source="release_notes", allow_null=True)
    forceUpdate = serializers.BooleanField(source="force_update")


class SupportRequestSerializer(serializers.Serializer):
    serial = serializers.CharField(max_length=64)
    hardwareId = serializers.CharField(max_length=255)
    appVersion = serializers.CharField(max_length=50)
    description = serializers.CharField()
    deviceName = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    systemVersion = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    phoneNumber = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)


class SupportRequestResponseSerializer(serializers.Serializer):
    ticketId = serializers.CharField(source="reference")
    status = serializers.CharField(source="status.value")


class CatalogPlanSerializer(serializers.Serializer):
    """Active plan priced in every configured currency."""

    id = serializers.UUIDField(source="plan.id")
    name = serializers.CharField(source="plan.name")
    durationMonths = serializers.IntegerField(source="plan.duration_months")
    priceUSD = serializers.DecimalField(source="plan.price_usd", coerce_to_string=False, **MONEY)
    deviceLimit = serializers.IntegerField(source="plan.device_limit")
    features = serializers.DictField(source="plan.features")
    limits = serializers.DictField(source="plan.limits")
    prices = PlanPriceSerializer(many=True)
