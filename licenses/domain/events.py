"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseGenerated(DomainEvent):
    """Event raised when a license is issued."""

    def __init__(
        self,
        license_id: uuid.UUID,
        serial: str,
        plan_id: uuid.UUID,
        product_type: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseGenerated event.

        Args:
            license_id: License UUID
            serial: Generated serial
            plan_id: Plan UUID
            product_type: POS or CLINIC
            occurred_at: When the event occurred
        """
        super().__init__(**self.base_fields(license_id, occurred_at))
        self.license_id = license_id
        self.serial = serial
        self.plan_id = plan_id
        self.product_type = product_type


class LicenseRenewed(DomainEvent):
    """Event raised when a license is renewed."""

    def __init__(
        self,
        license_id: uuid.UUID,
        months: int,
        new_expire_date: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(**self.base_fields(license_id, occurred_at))
        self.license_id = license_id
        self.months = months
        self.new_expire_date = new_expire_date


class LicensePauseToggled(DomainEvent):
    """Event raised when a license is paused or resumed."""

    def __init__(self, license_id: uuid.UUID, is_paused: bool, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(license_id, occurred_at))
        self.license_id = license_id
        self.is_paused = is_paused


class LicenseRevoked(DomainEvent):
    """Event raised when a license is revoked."""

    def __init__(self, license_id: uuid.UUID, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(license_id, occurred_at))
        self.license_id = license_id


class LicenseUpdated(DomainEvent):
    """Event raised when a license is edited from the back office."""

    def __init__(self, license_id: uuid.UUID, status: str, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(license_id, occurred_at))
        self.license_id = license_id
        self.status = status


class LicenseDeleted(DomainEvent):
    """Event raised when a license is deleted."""

    def __init__(self, license_id: uuid.UUID, serial: str, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(license_id, occurred_at))
        self.license_id = license_id
        self.serial = serial


class LicenseExpired(DomainEvent):
    """Event raised when the expiry sweep marks a license expired."""

    def __init__(self, license_id: uuid.UUID, serial: str, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(license_id, occurred_at))
        self.license_id = license_id
        self.serial = serial
