"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseActivated(DomainEvent):
    """Event raised when a device is activated on a license."""

    def __init__(
        self,
        device_id: uuid.UUID,
        license_id: uuid.UUID,
        hardware_id: str,
        reactivation: bool,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseActivated event.

        Args:
            device_id: Device UUID
            license_id: License UUID
            hardware_id: Bound hardware ID
            reactivation: True when the device was already bound
            occurred_at: When the event occurred
        """
        super().__init__(**self.base_fields(license_id, occurred_at))
        self.device_id = device_id
        self.license_id = license_id
        self.hardware_id = hardware_id
        self.reactivation = reactivation
