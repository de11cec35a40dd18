"""
Authentication and user management commands.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from audit.domain.audit_log import Actor
from core.domain.value_objects import Role


@dataclass
class LoginCommand:
    """Exchange credentials for a token pair."""

    email: str
    password: str
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None


@dataclass
class RefreshTokenCommand:
    """Exchange a refresh token for a new access token."""

    refresh_token: Optional[str]


@dataclass
class LogoutCommand:
    """Close the session behind the current access token."""

    session_id: Optional[uuid.UUID]
    actor: Optional[Actor] = None


@dataclass
class CreateUserCommand:
    """Create a back-office user."""

    name: str
    email: str
    password: str
    role: Role = Role.VIEWER
    actor: Optional[Actor] = None


@dataclass
class DeleteUserCommand:
    """Delete a user and their sessions."""

    user_id: uuid.UUID
    actor: Optional[Actor] = None
