"""
Currency domain entity and rate conversion.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, Optional

from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError

BASE_CURRENCY = "USD"

# Used when a currency is referenced but not configured.
FALLBACK_RATES = {"USD": Decimal("1"), "IQD": Decimal("1500")}


@dataclass(frozen=True)
class Currency:
    """A currency and its rate in units per one US dollar."""

    code: str
    rate: Decimal
    symbol: str
    last_updated: datetime

    def __post_init__(self):
        if not self.code or len(self.code) != 3:
            raise DomainValidationError("Currency code must be exactly 3 characters")
        object.__setattr__(self, "code", self.code.upper())
        if Decimal(self.rate) <= 0:
            raise DomainValidationError("Rate must be positive")
        if not self.symbol or len(self.symbol) > 5:
            raise DomainValidationError("Symbol must be 1 to 5 characters")

    @classmethod
    def create(cls, code: str, rate: Decimal, symbol: str) -> "Currency":
        """Create a currency stamped with the current time."""
        return cls(code=code, rate=Decimal(rate), symbol=symbol, last_updated=utcnow())

    def with_changes(self, rate: Optional[Decimal] = None, symbol: Optional[str] = None) -> "Currency":
        """Return a copy with rate and/or symbol changed."""
        return replace(
            self,
            rate=Decimal(rate) if rate is not None else self.rate,
            symbol=symbol if symbol is not None else self.symbol,
            last_updated=utcnow(),
        )


class RateTable:
    """Converts amounts to USD using configured currency rates."""

    def __init__(self, currencies: Iterable[Currency] = ()):
        self._rates: Dict[str, Decimal] = dict(FALLBACK_RATES)
        for currency in currencies:
            self._rates[currency.code] = Decimal(currency.rate)
        self._rates[BASE_CURRENCY] = Decimal("1")

    def rate(self, code: str) -> Decimal:
        """Units of the currency per USD (1 when unknown)."""
        return self._rates.get(code.upper(), Decimal("1")) or Decimal("1")

    def to_usd(self, amount: Decimal, code: str) -> Decimal:
        """Convert an amount in the given currency to USD."""
        if code.upper() == BASE_CURRENCY:
            return Decimal(amount)
        return Decimal(amount) / self.rate(code)

    def codes(self):
        """Known currency codes."""
        return sorted(self._rates)
