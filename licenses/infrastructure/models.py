"""
License and Transaction Django ORM models.

Domain entities are in licenses.domain.
"""
import uuid

from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    A serial sold under a plan.

    ``is_paused`` mirrors ``status == "paused"``; both are written
    together by the application layer.
    """

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("active", "Active"),
        ("paused", "Paused"),
        ("revoked", "Revoked"),
        ("expired", "Expired"),
    ]

    PRODUCT_CHOICES = [
        ("POS", "Point of sale"),
        ("CLINIC", "Clinic"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    serial = models.CharField(max_length=64, unique=True)
    plan = models.ForeignKey(
        "plans.Plan",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="licenses",
    )
    product_type = models.CharField(max_length=10, choices=PRODUCT_CHOICES, default="POS")
    customer_name = models.CharField(max_length=255)
    hardware_id = models.CharField(max_length=255, null=True, blank=True)
    device_limit = models.PositiveIntegerField(default=1, help_text="0 means unlimited")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    is_paused = models.BooleanField(default=False)
    expire_date = models.DateTimeField(null=True, blank=True)
    activation_date = models.DateTimeField(null=True, blank=True)
    activation_count = models.PositiveIntegerField(default=0)
    last_check_in = models.DateTimeField(null=True, blank=True)
    last_renewal_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "expire_date"]),
            models.Index(fields=["customer_name"]),
        ]

    def __str__(self):
        return self.serial


class Transaction(models.Model):
    """Money received for a license purchase or renewal."""

    TYPE_CHOICES = [
        ("purchase", "Purchase"),
        ("renewal", "Renewal"),
    ]

    STATUS_CHOICES = [
        ("completed", "Completed"),
        ("pending", "Pending"),
        ("refunded", "Refunded"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        License,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )
    customer_name = models.CharField(max_length=255)
    plan_name = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    currency = models.CharField(max_length=3, default="USD")
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="completed")
    date = models.DateTimeField(db_index=True)

    class Meta:
        db_table = "transactions"
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["status", "date"]),
        ]

    def __str__(self):
        return f"{self.type} {self.amount} {self.currency}"
