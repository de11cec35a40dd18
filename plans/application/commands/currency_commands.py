"""
Currency commands.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from audit.domain.audit_log import Actor


@dataclass
class AddCurrencyCommand:
    """Command to add a currency."""

    code: str
    rate: Decimal
    symbol: str
    actor: Optional[Actor] = None


@dataclass
class UpdateCurrencyCommand:
    """Command to change the rate and/or symbol of a currency."""

    code: str
    rate: Optional[Decimal] = None
    symbol: Optional[str] = None
    actor: Optional[Actor] = None


@dataclass
class DeleteCurrencyCommand:
    """Command to delete a currency."""

    code: str
    actor: Optional[Actor] = None


@dataclass
class SyncCurrencyRatesCommand:
    """Command to refresh every stored rate from the rate provider."""

    actor: Optional[Actor] = None
