"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

CENT = Decimal("0.01")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate and normalise email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")
        local, _, domain = self.value.strip().rpartition("@")
        if not local or not domain:
            raise ValueError(f"Invalid email address: {self.value}")
        object.__setattr__(self, "value", self.value.strip().lower())

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class Money(ValueObject):
    """Amount of money in a given currency, rounded to cents."""

    amount: Decimal
    currency: str

    def __post_init__(self):
        """Normalise amount and currency code."""
        if not self.currency:
            raise ValueError("Currency is required")
        amount = Decimal(str(self.amount)).quantize(CENT, rounding=ROUND_HALF_UP)
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", self.currency.upper())

    @classmethod
    def zero(cls, currency: str = "USD") -> "Money":
        """Return a zero amount in the given currency."""
        return cls(Decimal("0"), currency)

    def is_zero(self) -> bool:
        """Return True when the amount is zero."""
        return self.amount == 0

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


class LicenseStatus(Enum):
    """License status value object."""

    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    REVOKED = "revoked"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class ProductType(Enum):
    """Product line a license belongs to."""

    POS = "POS"
    CLINIC = "CLINIC"

    def __str__(self) -> str:
        return self.value


class RegistrationStatus(Enum):
    """Registration status shared by clinics and their users."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    SUSPENDED = "SUSPENDED"

    def __str__(self) -> str:
        return self.value


class Role(Enum):
    """Back-office role of a user."""

    ADMIN = "admin"
    DEVELOPER = "developer"
    VIEWER = "viewer"
    CLINIC_ADMIN = "clinic_admin"

    def __str__(self) -> str:
        return self.value


class TransactionType(Enum):
    """Kind of money movement recorded for a license."""

    PURCHASE = "purchase"
    RENEWAL = "renewal"

    def __str__(self) -> str:
        return self.value


class TransactionStatus(Enum):
    """Settlement state of a transaction."""

    COMPLETED = "completed"
    PENDING = "pending"
    REFUNDED = "refunded"

    def __str__(self) -> str:
        return self.value
