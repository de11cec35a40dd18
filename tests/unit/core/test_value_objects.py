"""
Unit tests for value objects and calendar helpers.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.domain.dates import add_months, days_from, remaining_days, start_of_day, start_of_month
from core.domain.value_objects import (
    Email,
    LicenseStatus,
    Money,
    RegistrationStatus,
    Role,
)


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email_is_normalised(self):
        assert str(Email("  Owner@Example.COM ")) == "owner@example.com"

    def test_invalid_email(self):
        with pytest.raises(ValueError):
            Email("not-an-email")

    def test_missing_local_part(self):
        with pytest.raises(ValueError):
            Email("@example.com")


class TestMoney:
    """Tests for Money value object."""

    def test_amount_rounded_to_cents(self):
        assert Money(Decimal("10.005"), "usd").amount == Decimal("10.01")

    def test_currency_uppercased(self):
        assert Money(1, "iqd").currency == "IQD"

    def test_equality_by_value(self):
        assert Money(Decimal("5"), "USD") == Money(Decimal("5.00"), "USD")
        assert Money(Decimal("5"), "USD") != Money(Decimal("5"), "IQD")

    def test_zero(self):
        assert Money.zero().is_zero()
        assert str(Money.zero("IQD")) == "0.00 IQD"

    def test_currency_required(self):
        with pytest.raises(ValueError):
            Money(Decimal("1"), "")


class TestEnums:
    """Wire values of the enums."""

    def test_license_status_values(self):
        assert LicenseStatus("paused") == LicenseStatus.PAUSED
        assert str(LicenseStatus.ACTIVE) == "active"

    def test_registration_status_values(self):
        assert str(RegistrationStatus.SUSPENDED) == "SUSPENDED"

    def test_role_values(self):
        assert Role("clinic_admin") == Role.CLINIC_ADMIN


class TestDates:
    """Tests for calendar helpers."""

    def test_add_months_clamps_day(self):
        moment = datetime(2026, 1, 31, 9, 30, tzinfo=timezone.utc)

        assert add_months(moment, 1) == datetime(2026, 2, 28, 9, 30, tzinfo=timezone.utc)

    def test_add_months_leap_year(self):
        assert add_months(datetime(2028, 1, 31), 1) == datetime(2028, 2, 29)

    def test_add_months_crosses_year(self):
        assert add_months(datetime(2026, 11, 15), 3) == datetime(2027, 2, 15)

    def test_add_months_negative(self):
        assert add_months(datetime(2026, 3, 31), -1) == datetime(2026, 2, 28)

    def test_remaining_days(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)

        assert remaining_days(now + timedelta(days=2, seconds=1), now) == 3
        assert remaining_days(now + timedelta(days=2), now) == 2
        assert remaining_days(now - timedelta(days=1), now) == 0
        assert remaining_days(None, now) == 0

    def test_start_of_day_and_month(self):
        moment = datetime(2026, 7, 19, 17, 45, 12, 500)

        assert start_of_day(moment) == datetime(2026, 7, 19)
        assert start_of_month(moment) == datetime(2026, 7, 1)

    def test_days_from(self):
        assert days_from(datetime(2026, 2, 27), 2) == datetime(2026, 3, 1)
