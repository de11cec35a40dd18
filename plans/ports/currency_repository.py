"""
Currency repository port (interface).
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional

from plans.domain.currency import Currency


class CurrencyRepository(ABC):
    """Abstract repository for Currency entities keyed by code."""

    @abstractmethod
    async def list_all(self) -> List[Currency]:
        """Return all currencies ordered by code."""

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Currency]:
        """
        Find a currency by its ISO code.

        Args:
            code: Three-letter code (case-insensitive)

        Returns:
            Currency entity or None if not found
        """

    @abstractmethod
    async def add(self, currency: Currency) -> Currency:
        """
        Insert a new currency.

        Raises:
            DuplicateError: If the code already exists
        """

    @abstractmethod
    async def save(self, currency: Currency) -> Currency:
        """Update an existing currency."""

    @abstractmethod
    async def delete(self, code: str) -> bool:
        """
        Delete a currency.

        Returns:
            True if a currency was deleted
        """

    @abstractmethod
    async def update_rates(self, rates: Dict[str, Decimal]) -> int:
        """
        Apply fetched rates to the stored currencies.

        Only currencies that already exist are touched; the base
        currency is never rewritten.

        Args:
            rates: Units per USD keyed by currency code

        Returns:
            Number of currencies updated
        """
