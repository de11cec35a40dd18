"""
Notification Django ORM model.
"""
import uuid

from django.db import models
from django.utils import timezone


class Notification(models.Model):
    """Message delivered to client installations."""

    CHANNEL_CHOICES = [
        ("direct", "Direct"),
        ("broadcast", "Broadcast"),
    ]

    PRODUCT_CHOICES = [
        ("POS", "POS"),
        ("CLINIC", "Clinic"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    body = models.TextField()
    target_serial = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    channel = models.CharField(max_length=20, choices=CHANNEL_CHOICES, default="broadcast")
    product_type = models.CharField(max_length=20, choices=PRODUCT_CHOICES, default="POS")
    sent_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "notifications"
        ordering = ["-sent_at"]

    def __str__(self):
        return self.title
