"""
Django admin configuration for audit app.
"""
import json

from django.contrib import admin
from django.utils.html import format_html

from audit.infrastructure.models import AuditLog, TrafficLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Admin interface for AuditLog model."""

    list_display = ["action", "user_id", "ip_address", "created_at"]
    list_filter = ["action", "created_at"]
    search_fields = ["action", "details", "ip_address"]
    readonly_fields = ["id", "user_id", "action", "details", "ip_address", "created_at"]

    def has_add_permission(self, request):
        """Audit logs are read-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Audit logs are read-only."""
        return False


@admin.register(TrafficLog)
class TrafficLogAdmin(admin.ModelAdmin):
    """Admin interface for TrafficLog model."""

    list_display = ["timestamp", "method", "endpoint", "status_display", "serial", "duration_ms"]
    list_filter = ["method", "status", "timestamp"]
    search_fields = ["endpoint", "serial", "hardware_id", "ip_address"]
    readonly_fields = ["id", "timestamp", "payload_display", "response_display"]
    fieldsets = (
        (
            "Request",
            {
                "fields": ("id", "timestamp", "method", "endpoint", "status", "duration_ms"),
            },
        ),
        (
            "Client",
            {
                "fields": ("serial", "hardware_id", "ip_address", "user_agent"),
            },
        ),
        (
            "Bodies",
            {
                "fields": ("payload_display", "response_display"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        color = "green" if obj.status < 400 else "orange" if obj.status < 500 else "red"
        return format_html('<span style="color: {};">{}</span>', color, obj.status)

    status_display.short_description = "Status"

    def _pretty(self, value):
        if value is None:
            return "-"
        return format_html(
            '<pre style="background: #f5f5f5; padding: 10px;">{}</pre>',
            json.dumps(value, indent=2),
        )

    def payload_display(self, obj):
        return self._pretty(obj.payload)

    payload_display.short_description = "Payload"

    def response_display(self, obj):
        return self._pretty(obj.response)

    response_display.short_description = "Response"
