"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from activations.domain.device import Device
from core.domain.dates import utcnow
from core.domain.exceptions import DeviceLimitExceededError
from licenses.domain.license import License


@dataclass(frozen=True)
class DeviceBinding:
    """Outcome of an activation: the updated license and its device."""

    license: License
    device: Device
    reactivation: bool


class SeatManager:
    """Domain service for binding devices to license seats."""

    @staticmethod
    def has_free_seat(license: License, active_devices: int) -> bool:
        """
        Check if one more device fits under the license's limit.

        Args:
            license: License entity
            active_devices: Number of currently active devices

        Returns:
            True if a new device may be bound (a limit of 0 is unlimited)
        """
        if license.device_limit == 0:
            return True
        return active_devices < license.device_limit

    @staticmethod
    def bind(
        license: License,
        existing: Optional[Device],
        active_devices: int,
        hardware_id: str,
        device_name: Optional[str] = None,
        app_version: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> DeviceBinding:
        """
        Bind a hardware ID to a license.

        A machine that is already bound is refreshed and never counts
        against the limit again. Every successful binding activates the
        license and records the hardware ID on it.

        Args:
            license: License entity (locked by the caller)
            existing: Device already bound with this hardware ID, if any
            active_devices: Number of active devices on the license
            hardware_id: Client machine fingerprint
            device_name: Optional display name
            app_version: Optional client version
            now: Activation time (defaults to utcnow)

        Returns:
            DeviceBinding with the new license and device state

        Raises:
            LicenseRevokedError: If the license is revoked
            LicenseExpiredError: If the license expired
            LicensePausedError: If the license is paused
            DeviceLimitExceededError: If a new device would exceed the limit
        """
        now = now or utcnow()
        license.ensure_activatable(now)

        reactivation = existing is not None and existing.is_active
        if reactivation:
            device = existing.refresh(device_name=device_name, app_version=app_version, now=now)
        else:
            if not SeatManager.has_free_seat(license, active_devices):
                raise DeviceLimitExceededError()
            if existing is not None:
                device = existing.refresh(device_name=device_name, app_version=app_version, now=now)
            else:
                device = Device.create(
                    license_id=license.id,
                    hardware_id=hardware_id,
                    device_name=device_name,
                    app_version=app_version,
                    now=now,
                )

        return DeviceBinding(
            license=license.record_activation(hardware_id, now=now),
            device=device,
            reactivation=reactivation,
        )
