"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
import uuid

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def insert(self, license: License) -> License:
        """
        Insert a newly issued license.

        Args:
            license: License entity to insert

        Returns:
            Inserted license entity

        Raises:
            DuplicateSerialError: If the serial is already taken
        """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Save changes to an existing license.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def find_by_serial(self, serial: str) -> Optional[License]:
        """
        Find a license by serial.

        Args:
            serial: License serial

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def list_all(self) -> List[License]:
        """Return every license, newest first."""

    @abstractmethod
    async def delete(self, license_id: uuid.UUID) -> bool:
        """
        Delete a license and its devices.

        Returns:
            True if a license was deleted
        """

    @abstractmethod
    async def find_lapsed(self, now: datetime) -> List[License]:
        """
        Find active licenses whose expiration date has passed.

        Args:
            now: Reference time

        Returns:
            List of License entities
        """

    @abstractmethod
    async def expire_if_lapsed(self, license_id: uuid.UUID, now: datetime) -> bool:
        """
        Mark a license expired only if it is still active and lapsed at now.

        A license renewed after it was read by the sweep is left untouched.

        Returns:
            True if the license was expired
        """

    @abstractmethod
    async def count_by_status(self, status: LicenseStatus) -> int:
        """Count licenses in a status."""

    @abstractmethod
    async def count_expiring(self, now: datetime, until: datetime) -> int:
        """Count active licenses expiring in the window (now, until]."""

    @abstractmethod
    async def count_customers(self) -> int:
        """Count distinct customer names."""
