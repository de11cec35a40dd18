"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License, Transaction


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "serial",
        "customer_name",
        "plan",
        "product_type",
        "status_display",
        "device_limit",
        "devices_bound",
        "expire_date",
        "created_at",
    ]
    list_filter = ["status", "product_type", "is_paused", "expire_date", "plan"]
    search_fields = ["serial", "customer_name", "hardware_id"]
    readonly_fields = [
        "id",
        "activation_count",
        "activation_date",
        "last_check_in",
        "last_renewal_date",
        "devices_bound",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "serial", "plan", "product_type", "customer_name"),
            },
        ),
        (
            "State",
            {
                "fields": ("status", "is_paused", "expire_date", "last_renewal_date"),
            },
        ),
        (
            "Devices",
            {
                "fields": (
                    "device_limit",
                    "devices_bound",
                    "hardware_id",
                    "activation_count",
                    "activation_date",
                    "last_check_in",
                ),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "pending": "gray",
            "active": "green",
            "paused": "orange",
            "revoked": "red",
            "expired": "gray",
        }
        color = colors.get(obj.status, "black")
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def devices_bound(self, obj):
        """Display active devices against the limit."""
        used = obj.devices.filter(is_active=True).count()
        if obj.device_limit and used >= obj.device_limit:
            return format_html('<span style="color: red;">{} / {}</span>', used, obj.device_limit)
        return f"{used} / {obj.device_limit or '∞'}"

    devices_bound.short_description = "Devices"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("plan").prefetch_related("devices")


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin interface for Transaction model."""

    list_display = ["date", "customer_name", "plan_name", "amount", "currency", "type", "status"]
    list_filter = ["type", "status", "currency", "date"]
    search_fields = ["customer_name", "plan_name", "license__serial"]
    readonly_fields = ["id"]
