"""
Django admin configuration for releases app.
"""
from django.contrib import admin

from releases.infrastructure.models import AppVersion, RemoteConfig, SystemSetting


@admin.register(AppVersion)
class AppVersionAdmin(admin.ModelAdmin):
    """Admin interface for AppVersion model."""

    list_display = ["version", "is_active", "force_update", "release_date"]
    list_filter = ["is_active", "force_update"]
    search_fields = ["version", "release_notes"]
    readonly_fields = ["id"]


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    list_display = ["key", "value", "updated_at"]
    search_fields = ["key"]


@admin.register(RemoteConfig)
class RemoteConfigAdmin(admin.ModelAdmin):
    list_display = ["key", "value", "updated_at"]
    search_fields = ["key"]
