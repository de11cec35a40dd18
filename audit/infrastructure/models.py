"""
AuditLog and TrafficLog Django ORM models.
"""
import uuid

from django.db import models
from django.utils import timezone


class AuditLog(models.Model):
    """Append-only record of a state-mutating operation."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(null=True, blank=True, db_index=True)
    action = models.CharField(max_length=64, db_index=True)
    details = models.TextField(blank=True, default="")
    ip_address = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["action", "created_at"]),
        ]

    def __str__(self):
        return f"{self.action} @ {self.created_at:%Y-%m-%d %H:%M}"


class TrafficLog(models.Model):
    """A request made by client software."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)
    method = models.CharField(max_length=10)
    endpoint = models.CharField(max_length=512)
    status = models.PositiveSmallIntegerField()
    serial = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    hardware_id = models.CharField(max_length=255, null=True, blank=True)
    ip_address = models.CharField(max_length=64, null=True, blank=True)
    user_agent = models.CharField(max_length=512, null=True, blank=True)
    payload = models.JSONField(null=True, blank=True)
    response = models.JSONField(null=True, blank=True)
    duration_ms = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = "traffic_logs"
        ordering = ["-timestamp"]

    def __str__(self):
        return f"{self.method} {self.endpoint} {self.status}"
