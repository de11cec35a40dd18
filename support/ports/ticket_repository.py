"""
Support ticket repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from support.domain.ticket import SupportTicket, TicketReply


class TicketRepository(ABC):
    """Abstract repository for SupportTicket entities."""

    @abstractmethod
    async def add(self, ticket: SupportTicket) -> SupportTicket:
        """Persist a new ticket."""

    @abstractmethod
    async def find_by_id(self, ticket_id: uuid.UUID) -> Optional[SupportTicket]:
        """Find a ticket with its replies."""

    @abstractmethod
    async def list_all(self) -> List[SupportTicket]:
        """Every ticket with its replies, newest first."""

    @abstractmethod
    async def add_reply(self, ticket: SupportTicket, reply: TicketReply) -> SupportTicket:
        """
        Store a reply together with the ticket fields it changed.

        Returns:
            The updated ticket
        """

    @abstractmethod
    async def save(self, ticket: SupportTicket) -> SupportTicket:
        """Update ticket fields."""

    @abstractmethod
    async def delete(self, ticket_id: uuid.UUID) -> bool:
        """Delete a ticket and its replies."""

    @abstractmethod
    async def count_open(self) -> int:
        """Number of tickets still in the open state."""

    @abstractmethod
    async def license_id_for_serial(self, serial: str) -> Optional[uuid.UUID]:
        """Id of the license with this serial, used to link device tickets."""
