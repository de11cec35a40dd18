"""
Session domain entity.

A session backs one refresh token. Deleting it logs the user out on
their next authenticated request.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.dates import utcnow


@dataclass(frozen=True)
class Session:
    """Login session tied to a refresh token id (``jti``)."""

    id: uuid.UUID
    user_id: uuid.UUID
    refresh_jti: str
    expires_at: datetime
    created_at: datetime
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None

    @classmethod
    def open(
        cls,
        user_id: uuid.UUID,
        refresh_jti: str,
        expires_at: datetime,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
        session_id: Optional[uuid.UUID] = None,
    ) -> "Session":
        """Create a session for a freshly issued refresh token."""
        return cls(
            id=session_id or uuid.uuid4(),
            user_id=user_id,
            refresh_jti=refresh_jti,
            expires_at=expires_at,
            created_at=utcnow(),
            user_agent=(user_agent or "")[:500] or None,
            ip_address=ip_address,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expires_at <= (now or utcnow())
