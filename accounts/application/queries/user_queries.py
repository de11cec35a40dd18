"""
User queries.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetCurrentUserQuery:
    """Profile of the authenticated user."""

    user_id: uuid.UUID


@dataclass
class ListUsersQuery:
    """Every user, newest first."""
