"""
Serializers for clinic endpoints.
"""

from rest_framework import serializers

from api.v1.auth.serializers import UserSerializer
from api.v1.licenses.serializers import LicenseSerializer
from clinics.domain.controls import UNSET, ControlsUpdate
from core.domain.exceptions import DomainValidationError

CONTROL_FIELDS = {
    "storageLimitMB": "storage_limit_mb",
    "usersLimit": "users_limit",
    "patientsLimit": "patients_limit",
    "locked": "locked",
    "lockReason": "lock_reason",
}


class RegisterClinicRequestSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=255)
    doctorName = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    hwid = serializers.CharField(min_length=5, max_length=255)
    systemVersion = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)


class ClinicSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    doctorName = serializers.CharField(source="doctor_name", allow_null=True)
    email = serializers.EmailField()
    phone = serializers.CharField(allow_null=True)
    address = serializers.CharField(allow_null=True)
    hwid = serializers.CharField()
    systemVersion = serializers.CharField(source="system_version", allow_null=True)
    status = serializers.CharField(source="status.value")
    licenseId = serializers.UUIDField(source="license_id", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class ClinicProfileSerializer(serializers.Serializer):
    """Clinic with its license and users, flattened into one object."""

    def to_representation(self, instance):
        data = ClinicSerializer(instance.clinic).data
        data["license"] = LicenseSerializer(instance.license).data if instance.license else None
        data["users"] = UserSerializer(instance.users, many=True).data
        return data


class ApproveClinicRequestSerializer(serializers.Serializer):
    planId = serializers.UUIDField(required=False, allow_null=True)


def controls_update_from(data) -> ControlsUpdate:
    """
    Build a partial update from a request body.

    Values are passed through untouched; ControlsUpdate rejects anything
    that is not exactly the expected JSON type.
    """
    kwargs = {attr: data.get(key, UNSET) for key, attr in CONTROL_FIELDS.items()}
    features = data.get("features") or {}
    if not isinstance(features, dict):
        raise DomainValidationError("features must be an object")
    return ControlsUpdate(features=dict(features), **kwargs)


class SubscriptionPlanSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    durationMonths = serializers.IntegerField()


class SubscriptionLicenseSerializer(serializers.Serializer):
    serial = serializers.CharField()
    status = serializers.CharField()
    expireDate = serializers.DateTimeField(allow_null=True)
    deviceLimit = serializers.IntegerField()
    activationCount = serializers.IntegerField()
    plan = SubscriptionPlanSerializer(allow_null=True)


class SubscriptionStatusSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="clinic_id")
    name = serializers.CharField()
    status = serializers.CharField(source="status.value")
    license = SubscriptionLicenseSerializer(allow_null=True)
    remainingDays = serializers.IntegerField(source="remaining_days")
    forceLogout = serializers.BooleanField(source="force_logout")
