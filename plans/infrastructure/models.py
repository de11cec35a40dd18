"""
Plan, PlanPrice and Currency Django ORM models.

Domain entities are in plans.domain.
"""
import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Plan(models.Model):
    """A sellable plan that licenses are issued under."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    price_usd = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    price_monthly = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    price_yearly = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="IQD")
    duration_months = models.PositiveIntegerField(default=12, validators=[MinValueValidator(1)])
    device_limit = models.PositiveIntegerField(default=1, help_text="0 means unlimited")
    features = models.JSONField(default=dict, blank=True, help_text="Capability flags")
    limits = models.JSONField(default=dict, blank=True, help_text="Quota name to number")
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "plans"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "created_at"]),
        ]

    def __str__(self):
        return self.name


class PlanPrice(models.Model):
    """Price of a plan in one currency."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    plan = models.ForeignKey(Plan, on_delete=models.CASCADE, related_name="prices")
    currency = models.CharField(max_length=3)
    monthly_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    period_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    yearly_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    discount = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    is_primary = models.BooleanField(default=False)

    class Meta:
        db_table = "plan_prices"
        ordering = ["-is_primary", "currency"]
        constraints = [
            models.UniqueConstraint(fields=["plan", "currency"], name="unique_plan_currency"),
        ]

    def __str__(self):
        return f"{self.plan_id} {self.currency}"


class Currency(models.Model):
    """Exchange rate of a currency in units per US dollar."""

    code = models.CharField(max_length=3, primary_key=True)
    rate = models.DecimalField(max_digits=18, decimal_places=6)
    symbol = models.CharField(max_length=5)
    last_updated = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "currencies"
        ordering = ["code"]
        verbose_name_plural = "currencies"

    def __str__(self):
        return self.code
