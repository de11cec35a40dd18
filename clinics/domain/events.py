"""
Clinic domain events.
"""
import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class ClinicRegistered(DomainEvent):
    """Event raised when a clinic self-registers."""

    def __init__(self, clinic_id: uuid.UUID, name: str, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(clinic_id, occurred_at))
        self.clinic_id = clinic_id
        self.name = name


class ClinicApproved(DomainEvent):
    """Event raised when an admin approves a clinic and its license is issued."""

    def __init__(
        self,
        clinic_id: uuid.UUID,
        license_id: uuid.UUID,
        plan_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize ClinicApproved event.

        Args:
            clinic_id: Clinic UUID
            license_id: Issued license UUID
            plan_id: Plan the license was issued under
            occurred_at: When the event occurred
        """
        super().__init__(**self.base_fields(clinic_id, occurred_at))
        self.clinic_id = clinic_id
        self.license_id = license_id
        self.plan_id = plan_id


class ClinicStatusChanged(DomainEvent):
    """Event raised on rejection, suspension and reinstatement."""

    def __init__(self, clinic_id: uuid.UUID, status: str, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(clinic_id, occurred_at))
        self.clinic_id = clinic_id
        self.status = status


class ClinicDeleted(DomainEvent):
    """Event raised when a clinic is deleted."""

    def __init__(self, clinic_id: uuid.UUID, name: str, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(clinic_id, occurred_at))
        self.clinic_id = clinic_id
        self.name = name


class SessionsRevoked(DomainEvent):
    """Event raised when a clinic's users are forcibly logged out."""

    def __init__(self, clinic_id: uuid.UUID, count: int, reason: str, occurred_at: Optional[datetime] = None):
        super().__init__(**self.base_fields(clinic_id, occurred_at))
        self.clinic_id = clinic_id
        self.count = count
        self.reason = reason
