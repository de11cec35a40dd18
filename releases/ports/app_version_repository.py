"""
AppVersion repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from releases.domain.app_version import AppVersion


class AppVersionRepository(ABC):
    """Abstract repository for AppVersion entities."""

    @abstractmethod
    async def add(self, version: AppVersion) -> AppVersion:
        """Persist a new version."""

    @abstractmethod
    async def save(self, version: AppVersion) -> AppVersion:
        """Update an existing version."""

    @abstractmethod
    async def find_by_id(self, version_id: uuid.UUID) -> Optional[AppVersion]:
        """Find a version by ID."""

    @abstractmethod
    async def list_all(self) -> List[AppVersion]:
        """Every version, newest release first."""

    @abstractmethod
    async def latest_active(self) -> Optional[AppVersion]:
        """
        Newest active release.

        Returns:
            AppVersion with the latest release date among active ones, or None
        """

    @abstractmethod
    async def delete(self, version_id: uuid.UUID) -> bool:
        """Delete a version."""
