"""
Traffic log repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
import uuid

from audit.domain.traffic_log import TrafficLog, TrafficLogFilter


class TrafficLogRepository(ABC):
    """Abstract repository for captured client traffic."""

    @abstractmethod
    async def add(self, entry: TrafficLog) -> TrafficLog:
        """Persist one captured request."""

    @abstractmethod
    async def search(self, criteria: TrafficLogFilter) -> Tuple[List[TrafficLog], int]:
        """
        Search entries newest first.

        Args:
            criteria: Filters and page

        Returns:
            Tuple of (entries on the requested page, total matching entries)
        """

    @abstractmethod
    async def find_by_id(self, log_id: uuid.UUID) -> Optional[TrafficLog]:
        """Find one entry by ID."""

    @abstractmethod
    async def clear(self) -> int:
        """
        Delete every entry.

        Returns:
            Number of deleted entries
        """
