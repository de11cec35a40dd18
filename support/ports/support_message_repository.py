"""
Support message repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from support.domain.support_message import MessageStatus, SupportMessage


class SupportMessageRepository(ABC):
    """Abstract repository for SupportMessage entities."""

    @abstractmethod
    async def add(self, message: SupportMessage) -> SupportMessage:
        """Persist a new message."""

    @abstractmethod
    async def find_by_id(self, message_id: uuid.UUID) -> Optional[SupportMessage]:
        """Find a message by ID."""

    @abstractmethod
    async def save(self, message: SupportMessage) -> SupportMessage:
        """Update status fields."""

    @abstractmethod
    async def delete(self, message_id: uuid.UUID) -> bool:
        """Delete a message."""

    @abstractmethod
    async def search(
        self,
        status: Optional[MessageStatus] = None,
        clinic_id: Optional[uuid.UUID] = None,
        text: Optional[str] = None,
        limit: int = 100,
    ) -> List[SupportMessage]:
        """
        Filter messages, newest first.

        Args:
            status: Only this status
            clinic_id: Only this clinic
            text: Case-insensitive match on clinic name, account code or message
            limit: Maximum number of rows

        Returns:
            Matching messages
        """

    @abstractmethod
    async def count_unread(self) -> int:
        """Number of NEW messages."""
