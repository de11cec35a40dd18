"""
Django admin configuration for plans app.
"""
from django.contrib import admin

from plans.infrastructure.models import Currency, Plan, PlanPrice


class PlanPriceInline(admin.TabularInline):
    """Per-currency prices edited inline with their plan."""

    model = PlanPrice
    extra = 0
    fields = ["currency", "monthly_price", "period_price", "yearly_price", "discount", "is_primary"]


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    """Admin interface for Plan model."""

    list_display = [
        "name",
        "duration_months",
        "device_limit",
        "price_usd",
        "currency",
        "is_active",
        "created_at",
    ]
    list_filter = ["is_active", "currency", "created_at"]
    search_fields = ["name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [PlanPriceInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "is_active"),
            },
        ),
        (
            "Terms",
            {
                "fields": ("duration_months", "device_limit", "features", "limits"),
            },
        ),
        (
            "Legacy Pricing",
            {
                "fields": ("price_usd", "price_monthly", "price_yearly", "currency"),
                "classes": ("collapse",),
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


@admin.register(Currency)
class CurrencyAdmin(admin.ModelAdmin):
    """Admin interface for Currency model."""

    list_display = ["code", "symbol", "rate", "last_updated"]
    search_fields = ["code"]
