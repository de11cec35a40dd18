"""
Clinic control repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod

from clinics.domain.controls import ClinicControl


class ClinicControlRepository(ABC):
    """Abstract repository for ClinicControl value objects."""

    @abstractmethod
    async def get_or_create(self, clinic_id: uuid.UUID) -> ClinicControl:
        """
        Return the clinic's controls, creating the defaults if absent.

        Args:
            clinic_id: Clinic UUID (must exist)
        """

    @abstractmethod
    async def save(self, control: ClinicControl) -> ClinicControl:
        """Persist controls for their clinic."""
