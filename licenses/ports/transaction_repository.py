"""
Transaction repository port (interface).
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from licenses.domain.transaction import Transaction


class TransactionRepository(ABC):
    """Abstract repository for Transaction entities."""

    @abstractmethod
    async def add(self, transaction: Transaction) -> Transaction:
        """Record a transaction."""

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> List[Transaction]:
        """
        Latest transactions first.

        Args:
            limit: Maximum number of transactions
        """

    @abstractmethod
    async def list_completed(self, since: Optional[datetime] = None) -> List[Transaction]:
        """
        Completed transactions, optionally only those at or after ``since``.
        """
