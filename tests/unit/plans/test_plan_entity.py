"""
Unit tests for Plan, PlanPrice and Currency.
"""

from decimal import Decimal

import pytest

from core.domain.exceptions import DomainValidationError
from core.domain.value_objects import Money
from plans.domain.currency import Currency, RateTable
from plans.domain.plan import Plan, PlanPrice, normalize_prices


class TestPlanPrice:
    """Tests for PlanPrice."""

    def test_currency_uppercased(self):
        assert PlanPrice(currency="iqd").currency == "IQD"

    def test_negative_amount_rejected(self):
        with pytest.raises(DomainValidationError):
            PlanPrice(currency="USD", monthly_price=Decimal("-1"))

    def test_discount_range(self):
        with pytest.raises(DomainValidationError):
            PlanPrice(currency="USD", discount=Decimal("101"))

    def test_amount_prefers_period_price(self):
        price = PlanPrice(currency="USD", monthly_price=Decimal("10"), period_price=Decimal("100"))

        assert price.amount_for(12) == Decimal("100")

    def test_amount_falls_back_to_monthly(self):
        assert PlanPrice(currency="USD", monthly_price=Decimal("10")).amount_for(6) == Decimal("60")


class TestNormalizePrices:
    """Tests for price de-duplication."""

    def test_first_occurrence_wins(self):
        prices = normalize_prices(
            [
                PlanPrice(currency="USD", monthly_price=Decimal("10")),
                PlanPrice(currency="usd", monthly_price=Decimal("99")),
                PlanPrice(currency="IQD", monthly_price=Decimal("15000")),
            ]
        )

        assert [p.currency for p in prices] == ["USD", "IQD"]
        assert prices[0].monthly_price == Decimal("10")

    def test_single_primary_kept(self):
        prices = normalize_prices(
            [
                PlanPrice(currency="USD"),
                PlanPrice(currency="IQD", is_primary=True),
                PlanPrice(currency="EUR", is_primary=True),
            ]
        )

        assert [p.is_primary for p in prices] == [False, True, False]

    def test_first_price_becomes_primary(self):
        prices = normalize_prices([PlanPrice(currency="USD"), PlanPrice(currency="IQD")])

        assert [p.is_primary for p in prices] == [True, False]

    def test_empty(self):
        assert normalize_prices([]) == []


class TestPlanEntity:
    """Tests for Plan domain entity."""

    def test_create_plan_defaults(self):
        plan = Plan.create(name="  Basic ")

        assert plan.name == "Basic"
        assert plan.duration_months == 12
        assert plan.device_limit == 1
        assert plan.is_active is True
        assert plan.prices == []

    @pytest.mark.parametrize(
        "kwargs",
        [{"name": "B"}, {"name": "Basic", "duration_months": 0}, {"name": "Basic", "device_limit": -1}],
    )
    def test_invalid_plan(self, kwargs):
        with pytest.raises(DomainValidationError):
            Plan.create(**kwargs)

    def test_legacy_fields_mirror_primary_price(self):
        plan = Plan.create(
            name="Pro",
            prices=[
                PlanPrice(currency="USD", monthly_price=Decimal("10"), yearly_price=Decimal("100")),
                PlanPrice(
                    currency="IQD",
                    monthly_price=Decimal("15000"),
                    yearly_price=Decimal("150000"),
                    is_primary=True,
                ),
            ],
        )

        assert plan.currency == "IQD"
        assert plan.price_monthly == Decimal("15000")
        assert plan.price_yearly == Decimal("150000")

    def test_base_price_uses_primary(self):
        plan = Plan.create(
            name="Pro",
            duration_months=6,
            prices=[PlanPrice(currency="IQD", monthly_price=Decimal("15000"), is_primary=True)],
        )

        assert plan.base_price() == Money(Decimal("90000"), "IQD")
        assert plan.is_trial is False

    def test_base_price_falls_back_to_usd(self):
        plan = Plan.create(name="Legacy", price_usd=Decimal("49.99"))

        assert plan.base_price() == Money(Decimal("49.99"), "USD")

    def test_zero_price_plan_is_trial(self):
        assert Plan.create(name="Trial", duration_months=1).is_trial is True

    def test_quote_explicit_price(self):
        plan = Plan.create(
            name="Pro",
            prices=[PlanPrice(currency="IQD", monthly_price=Decimal("15000"), is_primary=True)],
        )

        quote = plan.quote("iqd", Decimal("1500"))

        assert quote.monthly_price == Decimal("15000")
        assert quote.period_price == Decimal("0")
        assert quote.is_primary is True

    def test_quote_converted_from_usd(self):
        """Prices for unlisted currencies are derived and rounded to whole units."""
        plan = Plan.create(name="Legacy", duration_months=12, price_usd=Decimal("100"))

        quote = plan.quote("IQD", Decimal("1310.5"))

        assert quote.period_price == Decimal("131050")
        assert quote.monthly_price == Decimal("10921")
        assert quote.is_primary is False

    def test_quote_usd_is_primary(self):
        plan = Plan.create(name="Legacy", price_usd=Decimal("120"))

        assert plan.quote("USD", Decimal("1")).is_primary is True

    def test_update_replaces_fields(self):
        plan = Plan.create(name="Pro", price_usd=Decimal("10"))

        updated = plan.update(
            name="Pro Max",
            duration_months=24,
            device_limit=0,
            prices=[],
            features={"ai": True},
            limits=None,
            is_active=False,
        )

        assert updated.id == plan.id
        assert updated.name == "Pro Max"
        assert updated.device_limit == 0
        assert updated.price_usd == Decimal("10")
        assert updated.features == {"ai": True}
        assert updated.limits == {}

    def test_set_active(self):
        assert Plan.create(name="Pro").set_active(False).is_active is False


class TestCurrency:
    """Tests for Currency and RateTable."""

    def test_code_uppercased(self):
        assert Currency.create("eur", Decimal("0.9"), "€").code == "EUR"

    @pytest.mark.parametrize(
        "code,rate,symbol",
        [("EURO", "0.9", "€"), ("EUR", "0", "€"), ("EUR", "0.9", ""), ("EUR", "0.9", "EURO$$")],
    )
    def test_invalid_currency(self, code, rate, symbol):
        with pytest.raises(DomainValidationError):
            Currency.create(code, Decimal(rate), symbol)

    def test_with_changes(self):
        currency = Currency.create("IQD", Decimal("1500"), "IQD").with_changes(rate=Decimal("1310"))

        assert currency.rate == Decimal("1310")
        assert currency.symbol == "IQD"

    def test_rate_table_fallbacks(self):
        rates = RateTable()

        assert rates.rate("IQD") == Decimal("1500")
        assert rates.rate("USD") == Decimal("1")
        assert rates.rate("JPY") == Decimal("1")

    def test_configured_rate_overrides_fallback(self):
        rates = RateTable([Currency.create("IQD", Decimal("1310"), "IQD")])

        assert rates.to_usd(Decimal("2620"), "iqd") == Decimal("2")
        assert "IQD" in rates.codes()
