"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import Session, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin interface for User model."""

    list_display = ["email", "name", "role", "status", "clinic", "last_login", "created_at"]
    list_filter = ["role", "status", "is_staff"]
    search_fields = ["email", "name"]
    readonly_fields = ["id", "password", "last_login", "last_login_ip", "created_at"]
    exclude = ["groups", "user_permissions"]


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    """Admin interface for Session model."""

    list_display = ["user", "ip_address", "expires_at", "created_at"]
    search_fields = ["user__email", "ip_address"]
    readonly_fields = ["id", "refresh_jti", "created_at"]
