"""
Unit tests for serial generation.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from licenses.domain.serial import (
    PAID_PREFIX,
    SERIAL_ALPHABET,
    TRIAL_PREFIX,
    SerialGenerator,
    random_group,
    serial_prefix,
)
from plans.domain.plan import Plan, PlanPrice

NOW = datetime(2026, 5, 20, 10, 0, tzinfo=timezone.utc)
SERIAL_PATTERN = re.compile(r"^(TR|SP)-\d{4}-[A-HJ-NP-Z2-9]{4}-[A-HJ-NP-Z2-9]{4}-[A-HJ-NP-Z2-9]{4}$")


def paid_plan():
    return Plan.create(
        name="Yearly",
        duration_months=12,
        prices=[PlanPrice(currency="USD", period_price=Decimal("120"), is_primary=True)],
    )


def trial_plan():
    return Plan.create(name="Trial", duration_months=1)


class TestSerialPrefix:
    """Tests for serial_prefix."""

    def test_paid_plan(self):
        assert serial_prefix(paid_plan()) == PAID_PREFIX == "SP"

    def test_zero_price_plan(self):
        assert serial_prefix(trial_plan()) == TRIAL_PREFIX == "TR"

    def test_zero_priced_rows_are_trial(self):
        plan = Plan.create(
            name="Free",
            prices=[PlanPrice(currency="USD", period_price=Decimal("0"), is_primary=True)],
        )

        assert serial_prefix(plan) == "TR"


class TestSerialGenerator:
    """Tests for SerialGenerator service."""

    def test_format(self):
        serial = SerialGenerator.generate(paid_plan(), NOW)

        assert SERIAL_PATTERN.match(serial)
        assert serial.startswith("SP-2026-")

    def test_trial_format(self):
        serial = SerialGenerator.generate(trial_plan(), NOW)

        assert SERIAL_PATTERN.match(serial)
        assert serial.startswith("TR-2026-")

    @pytest.mark.parametrize("year", [2025, 2031])
    def test_year_comes_from_issue_time(self, year):
        serial = SerialGenerator.generate(paid_plan(), NOW.replace(year=year))

        assert serial.split("-")[1] == str(year)

    def test_alphabet_has_no_ambiguous_characters(self):
        assert not set("0O1I") & set(SERIAL_ALPHABET)
        assert len(SERIAL_ALPHABET) == 32

    def test_groups_use_the_alphabet(self):
        for _ in range(50):
            groups = SerialGenerator.generate(paid_plan(), NOW).split("-")[2:]

            assert len(groups) == 3
            assert all(len(group) == 4 for group in groups)
            assert all(char in SERIAL_ALPHABET for group in groups for char in group)

    def test_serials_differ(self):
        serials = {SerialGenerator.generate(paid_plan(), NOW) for _ in range(20)}

        assert len(serials) > 1

    def test_random_group_length(self):
        assert len(random_group(6)) == 6
