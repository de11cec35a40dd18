"""
Plan domain entity.

A plan defines the commercial terms a license is issued under:
duration, device limit, feature flags, quotas and per-currency prices.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Union

from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError
from core.domain.value_objects import Money

DEFAULT_PLAN_CURRENCY = "IQD"

Number = Union[int, float]


def _whole(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PlanPrice:
    """Price of a plan in one currency."""

    currency: str
    monthly_price: Optional[Decimal] = None
    period_price: Optional[Decimal] = None
    yearly_price: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    is_primary: bool = False

    def __post_init__(self):
        if not self.currency:
            raise DomainValidationError("Price currency is required")
        object.__setattr__(self, "currency", self.currency.upper())
        for name in ("monthly_price", "period_price", "yearly_price"):
            value = getattr(self, name)
            if value is not None and Decimal(value) < 0:
                raise DomainValidationError(f"{name} cannot be negative")
        if self.discount is not None and not 0 <= Decimal(self.discount) <= 100:
            raise DomainValidationError("discount must be between 0 and 100")

    def amount_for(self, duration_months: int) -> Decimal:
        """Full-period amount: the period price, else monthly price times duration."""
        if self.period_price:
            return Decimal(self.period_price)
        if self.monthly_price:
            return Decimal(self.monthly_price) * duration_months
        return Decimal("0")


def normalize_prices(prices: List[PlanPrice]) -> List[PlanPrice]:
    """
    Drop repeated currencies (first occurrence wins) and keep one primary price.

    Args:
        prices: Prices as submitted

    Returns:
        De-duplicated prices with exactly one primary entry (if any prices)
    """
    unique: List[PlanPrice] = []
    seen = set()
    for price in prices:
        if price.currency in seen:
            continue
        seen.add(price.currency)
        unique.append(price)

    if not unique:
        return unique

    primary_index = next((i for i, p in enumerate(unique) if p.is_primary), 0)
    return [replace(p, is_primary=(i == primary_index)) for i, p in enumerate(unique)]


@dataclass(frozen=True)
class Plan:
    """
    Plan domain entity.

    Legacy price fields (price_monthly, price_yearly, currency) mirror
    the primary price so older clients keep working.
    """

    id: uuid.UUID
    name: str
    duration_months: int
    device_limit: int
    features: Dict[str, bool]
    limits: Dict[str, Number]
    is_active: bool
    price_usd: Decimal
    price_monthly: Decimal
    price_yearly: Decimal
    currency: str
    prices: List[PlanPrice] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Validate plan entity."""
        if not self.name or len(self.name.strip()) < 2:
            raise DomainValidationError("Plan name must be at least 2 characters")
        if self.duration_months < 1:
            raise DomainValidationError("durationMonths must be a positive integer")
        if self.device_limit < 0:
            raise DomainValidationError("deviceLimit cannot be negative")

    @classmethod
    def create(
        cls,
        name: str,
        duration_months: int = 12,
        device_limit: int = 1,
        prices: Optional[List[PlanPrice]] = None,
        features: Optional[Dict[str, bool]] = None,
        limits: Optional[Dict[str, Number]] = None,
        is_active: bool = True,
        price_usd: Optional[Decimal] = None,
        plan_id: Optional[uuid.UUID] = None,
    ) -> "Plan":
        """
        Create a new Plan entity.

        Args:
            name: Display name
            duration_months: Billing period in months
            device_limit: Devices per license (0 = unlimited)
            prices: Per-currency prices
            features: Capability flags
            limits: Quotas
            is_active: Whether the plan can be sold
            price_usd: Legacy USD price
            plan_id: Optional UUID (generated if not provided)

        Returns:
            Plan entity instance
        """
        now = utcnow()
        plan = cls(
            id=plan_id or uuid.uuid4(),
            name=name.strip(),
            duration_months=duration_months,
            device_limit=device_limit,
            features=dict(features or {}),
            limits=dict(limits or {}),
            is_active=is_active,
            price_usd=Decimal(price_usd or 0),
            price_monthly=Decimal("0"),
            price_yearly=Decimal("0"),
            currency=DEFAULT_PLAN_CURRENCY,
            prices=[],
            created_at=now,
            updated_at=now,
        )
        return plan.with_prices(prices or [])

    @property
    def primary_price(self) -> Optional[PlanPrice]:
        """The primary price, else the first one."""
        for price in self.prices:
            if price.is_primary:
                return price
        return self.prices[0] if self.prices else None

    def base_price(self) -> Money:
        """
        Full-period price used for purchases and pro-rated renewals.

        Uses the primary price when the plan has per-currency prices,
        otherwise the legacy USD price.
        """
        primary = self.primary_price
        if primary is not None:
            return Money(primary.amount_for(self.duration_months), primary.currency)
        return Money(self.price_usd, "USD")

    @property
    def is_trial(self) -> bool:
        """A plan that costs nothing issues trial serials."""
        return self.base_price().is_zero()

    def quote(self, currency: str, rate: Decimal) -> PlanPrice:
        """
        Price row for one currency as listed to POS terminals.

        An explicit price for the currency wins (missing amounts read as 0);
        otherwise the USD price is converted with the given rate and
        rounded to whole units.

        Args:
            currency: Currency code
            rate: Units of the currency per USD

        Returns:
            PlanPrice for the currency
        """
        currency = currency.upper()
        for price in self.prices:
            if price.currency == currency:
                return PlanPrice(
                    currency=currency,
                    monthly_price=Decimal(price.monthly_price or 0),
                    period_price=Decimal(price.period_price or 0),
                    yearly_price=Decimal(price.yearly_price or 0),
                    discount=Decimal(price.discount or 0),
                    is_primary=price.is_primary,
                )

        period = Decimal(self.price_usd) * Decimal(rate)
        monthly = period / self.duration_months
        return PlanPrice(
            currency=currency,
            monthly_price=_whole(monthly),
            period_price=_whole(period),
            yearly_price=_whole(monthly * 12),
            discount=Decimal("0"),
            is_primary=currency == "USD",
        )

    def with_prices(self, prices: List[PlanPrice]) -> "Plan":
        """Return a copy with prices replaced and legacy fields mirrored."""
        clean = normalize_prices(prices)
        primary = next((p for p in clean if p.is_primary), None)
        return replace(
            self,
            prices=clean,
            price_monthly=Decimal(primary.monthly_price or 0) if primary else Decimal("0"),
            price_yearly=Decimal(primary.yearly_price or 0) if primary else Decimal("0"),
            currency=primary.currency if primary else self.currency,
            updated_at=utcnow(),
        )

    def update(
        self,
        name: str,
        duration_months: int,
        device_limit: int,
        prices: List[PlanPrice],
        features: Optional[Dict[str, bool]],
        limits: Optional[Dict[str, Number]],
        is_active: bool,
        price_usd: Optional[Decimal] = None,
    ) -> "Plan":
        """Return a copy with every editable field replaced."""
        updated = replace(
            self,
            name=name.strip(),
            duration_months=duration_months,
            device_limit=device_limit,
            features=dict(features or {}),
            limits=dict(limits or {}),
            is_active=is_active,
            price_usd=Decimal(price_usd) if price_usd is not None else self.price_usd,
        )
        return updated.with_prices(prices)

    def set_active(self, is_active: bool) -> "Plan":
        """Return a copy with the active flag changed."""
        return replace(self, is_active=is_active, updated_at=utcnow())
