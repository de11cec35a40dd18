"""
Support Django ORM models.
"""
import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class SupportTicket(models.Model):
    """Ticket raised from a POS installation."""

    STATUS_CHOICES = [
        ("open", "Open"),
        ("in_progress", "In progress"),
        ("resolved", "Resolved"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="tickets",
    )
    serial = models.CharField(max_length=64, db_index=True)
    hardware_id = models.CharField(max_length=255)
    device_name = models.CharField(max_length=255)
    system_version = models.CharField(max_length=100)
    phone_number = models.CharField(max_length=50)
    app_version = models.CharField(max_length=50)
    description = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="open", db_index=True)
    admin_reply = models.TextField(null=True, blank=True)
    reply_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "support_tickets"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.serial} ({self.status})"


class TicketReply(models.Model):
    """Staff reply on a ticket."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ticket = models.ForeignKey(SupportTicket, on_delete=models.CASCADE, related_name="replies")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="ticket_replies",
    )
    message = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "support_replies"
        ordering = ["created_at"]


class SupportMessage(models.Model):
    """Message from a clinic."""

    STATUS_CHOICES = [
        ("NEW", "New"),
        ("READ", "Read"),
        ("CLOSED", "Closed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic_id = models.UUIDField(db_index=True)
    clinic_name = models.CharField(max_length=255)
    account_code = models.CharField(max_length=100, null=True, blank=True)
    message = models.TextField()
    source = models.CharField(max_length=50, default="SMART_CLINIC")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="NEW", db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)
    closed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "support_messages"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.clinic_name}: {self.message[:40]}"
