"""
User repository port (interface).

This defines the contract for user persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from accounts.domain.user import User
from core.domain.value_objects import RegistrationStatus


class UserRepository(ABC):
    """Abstract repository for User entities."""

    @abstractmethod
    async def add(self, user: User, password: str) -> User:
        """
        Insert a user with a hashed password.

        Raises:
            DuplicateError: If the email is taken
        """

    @abstractmethod
    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """
        Find a user by ID.

        Args:
            user_id: User UUID

        Returns:
            User entity or None if not found
        """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive)."""

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Check credentials.

        Returns:
            The user when the password matches, else None
        """

    @abstractmethod
    async def clinic_status(self, user: User) -> Optional[RegistrationStatus]:
        """Status of the user's clinic, or None for staff users."""

    @abstractmethod
    async def record_login(self, user_id: uuid.UUID, ip_address: Optional[str], now: datetime) -> None:
        """Stamp last login time and address."""

    @abstractmethod
    async def list_all(self) -> List[User]:
        """Return every user, newest first."""

    @abstractmethod
    async def delete(self, user_id: uuid.UUID) -> bool:
        """
        Delete a user and their sessions.

        Returns:
            True if a user was deleted
        """
