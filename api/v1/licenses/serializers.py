"""
Serializers for license endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import LicenseStatus
from licenses.application.commands.generate_licenses import MAX_BATCH_SIZE


class PlanSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    durationMonths = serializers.IntegerField(source="duration_months")
    deviceLimit = serializers.IntegerField(source="device_limit")
    features = serializers.DictField()
    limits = serializers.DictField()


class LicenseSerializer(serializers.Serializer):
    """License as shown in the dashboard."""

    id = serializers.UUIDField()
    serial = serializers.CharField()
    planId = serializers.UUIDField(source="plan_id", allow_null=True)
    productType = serializers.CharField(source="product_type.value")
    customerName = serializers.CharField(source="customer_name")
    status = serializers.CharField(source="status.value")
    isPaused = serializers.BooleanField(source="is_paused")
    deviceLimit = serializers.IntegerField(source="device_limit")
    expireDate = serializers.DateTimeField(source="expire_date", allow_null=True)
    hardwareId = serializers.CharField(source="hardware_id", allow_null=True)
    activationDate = serializers.DateTimeField(source="activation_date", allow_null=True)
    activationCount = serializers.IntegerField(source="activation_count")
    lastCheckIn = serializers.DateTimeField(source="last_check_in", allow_null=True)
    lastRenewalDate = serializers.DateTimeField(source="last_renewal_date", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class LicenseDetailSerializer(serializers.Serializer):
    """A license flattened together with its plan summary."""

    def to_representation(self, instance):
        data = LicenseSerializer(instance.license).data
        data["plan"] = PlanSummarySerializer(instance.plan).data if instance.plan else None
        return data


class GenerateLicensesRequestSerializer(serializers.Serializer):
    planId = serializers.UUIDField()
    customerName = serializers.CharField(min_length=2, max_length=200)
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_BATCH_SIZE, default=1)


class UpdateLicenseRequestSerializer(serializers.Serializer):
    """Admin edit; omitted fields are kept."""

    customerName = serializers.CharField(required=False, max_length=200)
    hardwareId = serializers.CharField(required=False, allow_blank=True, max_length=255)
    status = serializers.ChoiceField(choices=[status.value for status in LicenseStatus], required=False)


class RenewLicenseRequestSerializer(serializers.Serializer):
    months = serializers.IntegerField()
