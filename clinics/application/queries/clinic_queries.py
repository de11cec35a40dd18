"""
Clinic queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import RegistrationStatus


@dataclass
class ListClinicsQuery:
    """Clinics for the review screen, optionally filtered by status."""

    status: Optional[RegistrationStatus] = None


@dataclass
class GetClinicControlsQuery:
    """Current controls of a clinic."""

    clinic_id: uuid.UUID


@dataclass
class GetSubscriptionStatusQuery:
    """Access state of a clinic, as polled by its client software."""

    clinic_id: uuid.UUID
