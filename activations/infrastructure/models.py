"""
Device Django ORM model.

This is the infrastructure layer model for devices.
Domain entities are in activations.domain.device.
"""
import uuid

from django.db import models
from django.utils import timezone


class Device(models.Model):
    """
    A machine bound to a license.
    Consumes one of the license's device slots while active.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.CASCADE,
        related_name="devices",
    )
    hardware_id = models.CharField(max_length=255, help_text="Client machine fingerprint")
    device_name = models.CharField(max_length=255, null=True, blank=True)
    app_version = models.CharField(max_length=50, null=True, blank=True)
    last_check_in = models.DateTimeField(default=timezone.now)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "devices"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["license", "hardware_id"], name="unique_device_per_license"),
        ]
        indexes = [
            models.Index(fields=["license", "is_active"]),
        ]

    def __str__(self):
        return f"{self.hardware_id} ({self.device_name or 'unnamed'})"
