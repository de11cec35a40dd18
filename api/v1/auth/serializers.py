"""
Serializers for authentication and user management endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import Role


class LoginRequestSerializer(serializers.Serializer):
    """Credentials; emptiness is reported by the login handler."""

    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)


class RefreshRequestSerializer(serializers.Serializer):
    refreshToken = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class UserProfileSerializer(serializers.Serializer):
    """Public shape of a user."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()
    role = serializers.CharField()
    clinicId = serializers.UUIDField(source="clinic_id", allow_null=True)


class LoginResponseSerializer(serializers.Serializer):
    accessToken = serializers.CharField(source="access_token")
    refreshToken = serializers.CharField(source="refresh_token")
    user = UserProfileSerializer()


class RefreshResponseSerializer(serializers.Serializer):
    accessToken = serializers.CharField()


class UserSerializer(serializers.Serializer):
    """User as listed in the admin screen."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()
    role = serializers.CharField(source="role.value")
    status = serializers.CharField(source="status.value")
    clinicId = serializers.UUIDField(source="clinic_id", allow_null=True)
    lastLogin = serializers.DateTimeField(source="last_login", allow_null=True)
    lastLoginIp = serializers.CharField(source="last_login_ip", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")


class CreateUserRequestSerializer(serializers.Serializer):
    """Serializer for creating a back-office user."""

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)
    role = serializers.ChoiceField(
        choices=[Role.ADMIN.value, Role.DEVELOPER.value, Role.VIEWER.value],
        default=Role.VIEWER.value,
    )
