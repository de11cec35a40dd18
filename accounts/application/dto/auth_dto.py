"""
Authentication DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from accounts.domain.user import User


@dataclass
class TokenPair:
    """Freshly minted tokens for one session."""

    access_token: str
    refresh_token: str
    refresh_jti: str
    expires_at: datetime


@dataclass
class UserProfileDTO:
    """Public shape of a user."""

    id: uuid.UUID
    name: str
    email: str
    role: str
    clinic_id: Optional[uuid.UUID] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserProfileDTO":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            clinic_id=user.clinic_id,
        )


@dataclass
class LoginResultDTO:
    """Result of a successful login."""

    access_token: str
    refresh_token: str
    user: UserProfileDTO
