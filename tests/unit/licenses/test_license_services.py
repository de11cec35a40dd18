"""
Unit tests for license domain services.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from core.domain.value_objects import LicenseStatus, Money, ProductType, TransactionStatus, TransactionType
from licenses.application.services.license_cache_service import capped_validation_ttl
from licenses.domain.services import LicenseIssuer, LicensePricing, RevenueCalculator
from licenses.domain.transaction import Transaction
from plans.domain.currency import Currency, RateTable
from plans.domain.plan import Plan, PlanPrice

NOW = datetime(2026, 5, 20, 10, 0, tzinfo=timezone.utc)


def paid_plan():
    return Plan.create(
        name="Yearly",
        duration_months=12,
        device_limit=3,
        prices=[PlanPrice(currency="USD", period_price=Decimal("120"), is_primary=True)],
    )


def trial_plan():
    return Plan.create(name="Trial", duration_months=1, device_limit=1)


def transaction(amount, currency="USD", date=NOW, status=TransactionStatus.COMPLETED):
    return Transaction(
        id=uuid.uuid4(),
        license_id=uuid.uuid4(),
        customer_name="Corner Shop",
        plan_name="Yearly",
        amount=Decimal(amount),
        currency=currency,
        type=TransactionType.PURCHASE,
        status=status,
        date=date,
    )


class TestLicenseIssuer:
    """Tests for LicenseIssuer service."""

    def test_candidates_have_distinct_serials(self):
        plan = paid_plan()

        candidates = list(LicenseIssuer.candidates(plan, "Corner Shop", now=NOW))

        assert len(candidates) == LicenseIssuer.MAX_ATTEMPTS
        assert len({c.serial for c in candidates}) > 1

    def test_candidates_follow_plan_terms(self):
        plan = paid_plan()

        license = next(LicenseIssuer.candidates(plan, "Corner Shop", now=NOW))

        assert license.plan_id == plan.id
        assert license.device_limit == 3
        assert license.status == LicenseStatus.PENDING
        assert license.product_type == ProductType.POS
        assert license.expire_date == datetime(2027, 5, 20, 10, 0, tzinfo=timezone.utc)

    def test_clinic_candidates(self):
        license = next(
            LicenseIssuer.candidates(
                paid_plan(), "Smile Clinic", product_type=ProductType.CLINIC, status=LicenseStatus.ACTIVE
            )
        )

        assert license.product_type == ProductType.CLINIC
        assert license.status == LicenseStatus.ACTIVE


class TestLicensePricing:
    """Tests for LicensePricing service."""

    def test_purchase_price_is_full_period(self):
        assert LicensePricing.purchase_price(paid_plan()) == Money(Decimal("120"), "USD")

    def test_renewal_price_is_pro_rated(self):
        assert LicensePricing.renewal_price(paid_plan(), 3) == Money(Decimal("30"), "USD")

    def test_renewal_price_rounds_to_cents(self):
        plan = Plan.create(
            name="Odd",
            duration_months=7,
            prices=[PlanPrice(currency="USD", period_price=Decimal("100"), is_primary=True)],
        )

        assert LicensePricing.renewal_price(plan, 1).amount == Decimal("14.29")

    def test_trial_renewal_is_free(self):
        assert LicensePricing.renewal_price(trial_plan(), 6).is_zero()


class TestRevenueCalculator:
    """Tests for RevenueCalculator service."""

    def test_total_converts_to_usd(self):
        rates = RateTable([Currency.create("IQD", Decimal("1500"), "IQD")])
        calculator = RevenueCalculator(rates)

        total = calculator.total([transaction("100"), transaction("150000", currency="IQD")])

        assert total == Decimal("200.00")

    def test_only_completed_transactions_count(self):
        calculator = RevenueCalculator(RateTable())

        total = calculator.total([transaction("50"), transaction("70", status=TransactionStatus.PENDING)])

        assert total == Decimal("50.00")

    def test_unknown_currency_counts_at_par(self):
        assert RevenueCalculator(RateTable()).total([transaction("12", currency="XYZ")]) == Decimal("12.00")

    def test_financial_summary(self):
        calculator = RevenueCalculator(RateTable())
        transactions = [
            transaction("10", date=NOW),
            transaction("20", date=datetime(2026, 5, 2, tzinfo=timezone.utc)),
            transaction("40", date=datetime(2025, 12, 1, tzinfo=timezone.utc)),
        ]

        summary = calculator.financial_summary(transactions, NOW)

        assert summary["total_revenue"] == Decimal("70.00")
        assert summary["monthly_revenue"] == Decimal("30.00")
        assert summary["daily_revenue"] == Decimal("10.00")

    def test_monthly_history(self):
        """Twelve buckets, oldest first, ending with the current month."""
        calculator = RevenueCalculator(RateTable())
        transactions = [
            transaction("10", date=NOW),
            transaction("25", date=datetime(2026, 1, 31, 23, 0, tzinfo=timezone.utc)),
            transaction("99", date=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        ]

        history = calculator.monthly_history(transactions, NOW)

        assert len(history) == 12
        assert history[0]["name"] == "Jun"
        assert history[-1] == {"name": "May", "revenue": Decimal("10.00")}
        assert {"name": "Jan", "revenue": Decimal("25.00")} in history
        assert sum(point["revenue"] for point in history) == Decimal("35.00")


class TestValidationCacheTTL:
    """Tests for capped_validation_ttl."""

    def test_no_expiry_uses_setting(self, settings):
        settings.LICENSE_VALIDATION_CACHE_TTL = 60

        assert capped_validation_ttl(None, NOW) == 60

    def test_capped_at_seconds_left(self, settings):
        settings.LICENSE_VALIDATION_CACHE_TTL = 60

        assert capped_validation_ttl(NOW + timedelta(seconds=15), NOW) == 15
        assert capped_validation_ttl(NOW + timedelta(days=30), NOW) == 60

    def test_lapsed_license_is_not_cached(self, settings):
        settings.LICENSE_VALIDATION_CACHE_TTL = 60

        assert capped_validation_ttl(NOW - timedelta(minutes=1), NOW) == 0
        assert capped_validation_ttl(NOW, NOW) == 0
