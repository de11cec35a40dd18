"""
Audit log repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional
import uuid

from audit.domain.audit_log import AuditLog


class AuditLogRepository(ABC):
    """Abstract repository for the append-only audit log."""

    @abstractmethod
    async def add(self, entry: AuditLog) -> AuditLog:
        """
        Append an entry.

        Args:
            entry: AuditLog entity

        Returns:
            The stored entry
        """

    @abstractmethod
    async def list(
        self,
        action: Optional[str] = None,
        user_id: Optional[uuid.UUID] = None,
        limit: int = 200,
    ) -> List[AuditLog]:
        """
        List entries newest first.

        Args:
            action: Only entries with this action
            user_id: Only entries written for this user
            limit: Maximum number of entries

        Returns:
            List of AuditLog entities
        """

    @abstractmethod
    async def clear(self) -> int:
        """
        Delete every entry.

        Returns:
            Number of deleted entries
        """
