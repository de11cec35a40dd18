"""
Clinic and ClinicControl Django ORM models.

Domain entities are in clinics.domain.
"""
import uuid

from django.db import models
from django.utils import timezone

from clinics.domain.controls import DEFAULT_FEATURES, DEFAULT_STORAGE_LIMIT_MB, DEFAULT_USERS_LIMIT


def default_features():
    return dict(DEFAULT_FEATURES)


class Clinic(models.Model):
    """A tenant of the clinic product."""

    STATUS_CHOICES = [
        ("PENDING", "Pending"),
        ("APPROVED", "Approved"),
        ("REJECTED", "Rejected"),
        ("SUSPENDED", "Suspended"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    doctor_name = models.CharField(max_length=255, null=True, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=50, null=True, blank=True)
    address = models.CharField(max_length=500, null=True, blank=True)
    hwid = models.CharField(max_length=255, unique=True)
    system_version = models.CharField(max_length=100, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="PENDING", db_index=True)
    license = models.OneToOneField(
        "licenses.License",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="clinic",
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "clinics"
        ordering = ["-created_at"]

    def __str__(self):
        return self.name


class ClinicControl(models.Model):
    """Quotas, feature flags and lock state of one clinic."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic = models.OneToOneField(Clinic, on_delete=models.CASCADE, related_name="control")
    storage_limit_mb = models.PositiveIntegerField(default=DEFAULT_STORAGE_LIMIT_MB)
    users_limit = models.PositiveIntegerField(default=DEFAULT_USERS_LIMIT)
    patients_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Empty means unlimited")
    features = models.JSONField(default=default_features)
    locked = models.BooleanField(default=False)
    lock_reason = models.CharField(max_length=500, null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "clinic_controls"

    def __str__(self):
        return f"Controls for {self.clinic}"
