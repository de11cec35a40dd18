"""
Django admin configuration for activations app.
"""
from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import Device


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    """Admin interface for Device model."""

    list_display = [
        "license",
        "hardware_id_display",
        "device_name",
        "app_version",
        "is_active_display",
        "last_check_in",
    ]
    list_filter = ["is_active", "app_version", "last_check_in"]
    search_fields = ["hardware_id", "device_name", "license__serial", "license__customer_name"]
    readonly_fields = ["id", "created_at", "last_check_in"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license", "is_active"),
            },
        ),
        (
            "Machine",
            {
                "fields": ("hardware_id", "device_name", "app_version"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "last_check_in"),
                "classes": ("collapse",),
            },
        ),
    )

    def hardware_id_display(self, obj):
        """Display hardware ID with truncation."""
        if len(obj.hardware_id) > 32:
            return format_html('<span title="{}">{}</span>', obj.hardware_id, obj.hardware_id[:29] + "...")
        return obj.hardware_id

    hardware_id_display.short_description = "Hardware ID"

    def is_active_display(self, obj):
        """Display active status with color."""
        if obj.is_active:
            return format_html('<span style="color: green; font-weight: bold;">✓ Active</span>')
        return format_html('<span style="color: red; font-weight: bold;">✗ Inactive</span>')

    is_active_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license")
