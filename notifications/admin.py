"""
Django admin configuration for notifications app.
"""
from django.contrib import admin

from notifications.infrastructure.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Admin interface for Notification model."""

    list_display = ["title", "channel", "target_serial", "product_type", "sent_at"]
    list_filter = ["channel", "product_type", "sent_at"]
    search_fields = ["title", "body", "target_serial"]
    readonly_fields = ["id", "sent_at"]
