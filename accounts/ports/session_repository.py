"""
Session repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from accounts.domain.session import Session


class SessionRepository(ABC):
    """
    Abstract repository for login sessions.

    Sessions are deleted, never flagged, so a revoked session cannot be
    used again.
    """

    @abstractmethod
    async def add(self, session: Session) -> Session:
        """Persist a new session."""

    @abstractmethod
    async def find_active(self, session_id: uuid.UUID, now: datetime) -> Optional[Session]:
        """
        Find an unexpired session.

        Args:
            session_id: Session UUID
            now: Reference time

        Returns:
            Session entity or None if missing or expired
        """

    @abstractmethod
    async def find_by_refresh_jti(self, refresh_jti: str) -> Optional[Session]:
        """Find the session that owns a refresh token."""

    @abstractmethod
    async def delete(self, session_id: uuid.UUID) -> bool:
        """Delete one session."""

    @abstractmethod
    async def delete_for_user(self, user_id: uuid.UUID) -> int:
        """
        Delete every session of a user.

        Returns:
            Number of sessions deleted
        """

    @abstractmethod
    async def delete_for_clinic(self, clinic_id: uuid.UUID) -> int:
        """
        Delete every session of every user of a clinic.

        Returns:
            Number of sessions deleted
        """
