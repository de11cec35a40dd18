"""
Device domain entity.

A device is one seat of a license: a (license, hardware ID) binding.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError


@dataclass(frozen=True)
class Device:
    """
    Device domain entity.

    The hardware ID is unique within the devices of one license.
    Repeat activations from the same machine update the existing
    device instead of creating a new one.
    """

    id: uuid.UUID
    license_id: uuid.UUID
    hardware_id: str
    device_name: Optional[str]
    app_version: Optional[str]
    last_check_in: datetime
    is_active: bool
    created_at: datetime

    def __post_init__(self):
        """Validate device entity."""
        if not self.license_id:
            raise DomainValidationError("License ID is required")
        if not self.hardware_id or not self.hardware_id.strip():
            raise DomainValidationError("hardwareId is required")

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        hardware_id: str,
        device_name: Optional[str] = None,
        app_version: Optional[str] = None,
        now: Optional[datetime] = None,
        device_id: Optional[uuid.UUID] = None,
    ) -> "Device":
        """
        Create a newly bound device.

        Args:
            license_id: License UUID
            hardware_id: Client supplied machine fingerprint
            device_name: Optional display name
            app_version: Optional client version
            now: Binding time (defaults to utcnow)
            device_id: Optional UUID (generated if not provided)

        Returns:
            Device entity instance
        """
        now = now or utcnow()
        return cls(
            id=device_id or uuid.uuid4(),
            license_id=license_id,
            hardware_id=hardware_id.strip(),
            device_name=device_name,
            app_version=app_version,
            last_check_in=now,
            is_active=True,
            created_at=now,
        )

    def refresh(
        self,
        device_name: Optional[str] = None,
        app_version: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Device":
        """
        Return a copy with new metadata and check-in time.

        Missing metadata keeps the stored value.
        """
        return replace(
            self,
            device_name=device_name or self.device_name,
            app_version=app_version or self.app_version,
            last_check_in=now or utcnow(),
            is_active=True,
        )
