"""
Django admin configuration for clinics app.
"""
from django.contrib import admin
from django.utils.html import format_html

from clinics.infrastructure.models import Clinic, ClinicControl


class ClinicControlInline(admin.StackedInline):
    model = ClinicControl
    can_delete = False
    extra = 0


@admin.register(Clinic)
class ClinicAdmin(admin.ModelAdmin):
    """Admin interface for Clinic model."""

    list_display = ["name", "email", "doctor_name", "hwid", "status_display", "license", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["name", "email", "hwid", "doctor_name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [ClinicControlInline]

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "PENDING": "orange",
            "APPROVED": "green",
            "REJECTED": "gray",
            "SUSPENDED": "red",
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.status,
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("license")


@admin.register(ClinicControl)
class ClinicControlAdmin(admin.ModelAdmin):
    """Admin interface for ClinicControl model."""

    list_display = ["clinic", "storage_limit_mb", "users_limit", "patients_limit", "locked"]
    list_filter = ["locked"]
    search_fields = ["clinic__name"]
