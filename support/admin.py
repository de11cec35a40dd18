"""
Django admin configuration for support app.
"""
from django.contrib import admin

from support.infrastructure.models import SupportMessage, SupportTicket, TicketReply


class TicketReplyInline(admin.TabularInline):
    model = TicketReply
    extra = 0
    readonly_fields = ["user", "created_at"]


@admin.register(SupportTicket)
class SupportTicketAdmin(admin.ModelAdmin):
    """Admin interface for SupportTicket model."""

    list_display = ["serial", "device_name", "phone_number", "status", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["serial", "hardware_id", "phone_number", "description"]
    readonly_fields = ["id", "created_at", "reply_at"]
    inlines = [TicketReplyInline]


@admin.register(SupportMessage)
class SupportMessageAdmin(admin.ModelAdmin):
    """Admin interface for SupportMessage model."""

    list_display = ["clinic_name", "account_code", "status", "source", "created_at"]
    list_filter = ["status", "source"]
    search_fields = ["clinic_name", "account_code", "message"]
    readonly_fields = ["id", "created_at", "read_at", "closed_at"]
