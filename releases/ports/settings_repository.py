"""
Settings repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class SettingsRepository(ABC):
    """
    Key/value stores for system settings and remote client configuration.

    Values are arbitrary JSON.
    """

    @abstractmethod
    async def system_settings(self) -> Dict[str, Any]:
        """All system settings as a map."""

    @abstractmethod
    async def upsert_system_settings(self, entries: Dict[str, Any]) -> None:
        """Create or overwrite the given system settings."""

    @abstractmethod
    async def remote_config(self) -> Dict[str, Any]:
        """All remote configuration entries as a map."""

    @abstractmethod
    async def upsert_remote_config(self, entries: Dict[str, Any]) -> None:
        """Create or overwrite the given remote configuration entries."""
