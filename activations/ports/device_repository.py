"""
Device repository port (interface).

This defines the contract for device persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from activations.domain.device import Device
from activations.domain.services import DeviceBinding
from licenses.domain.license import License


class DeviceRepository(ABC):
    """
    Abstract repository for Device entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def bind(
        self,
        serial: str,
        hardware_id: str,
        device_name: Optional[str] = None,
        app_version: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> DeviceBinding:
        """
        Activate a hardware ID on the license with the given serial.

        The license row stays locked from the device-limit check until
        the device and license are written, so concurrent activations
        of one license are serialized.

        Args:
            serial: License serial
            hardware_id: Client machine fingerprint
            device_name: Optional display name
            app_version: Optional client version
            now: Activation time

        Returns:
            DeviceBinding

        Raises:
            LicenseNotFoundError: If the serial is unknown
            LicenseRevokedError: If the license is revoked
            LicenseExpiredError: If the license expired
            LicensePausedError: If the license is paused
            DeviceLimitExceededError: If a new device would exceed the limit
        """

    @abstractmethod
    async def check_in(
        self,
        serial: str,
        hardware_id: Optional[str],
        app_version: Optional[str] = None,
        device_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[License]:
        """
        Stamp the check-in time on a license and its matching device.

        Returns:
            Updated License entity, or None if the serial is unknown
        """

    @abstractmethod
    async def find_by_license_and_hardware(self, license_id: uuid.UUID, hardware_id: str) -> Optional[Device]:
        """
        Find a device by license and hardware ID.

        Args:
            license_id: License UUID
            hardware_id: Hardware ID

        Returns:
            Device entity or None if not found
        """

    @abstractmethod
    async def list_by_license(self, license_id: uuid.UUID) -> List[Device]:
        """Return every device bound to a license."""

    @abstractmethod
    async def count_active(self, license_id: uuid.UUID) -> int:
        """Count active devices bound to a license."""
