"""
Clinic repository port (interface).

This defines the contract for clinic persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from accounts.domain.user import User
from clinics.domain.clinic import Clinic, ClinicProfile
from core.domain.value_objects import RegistrationStatus
from licenses.domain.license import License
from plans.domain.plan import Plan


class ClinicRepository(ABC):
    """
    Abstract repository for Clinic entities.

    Multi-step transitions (register, approve, toggle, delete) are
    single operations here so each runs in one database transaction.
    """

    @abstractmethod
    async def register(self, clinic: Clinic, admin: User, password: str) -> ClinicProfile:
        """
        Insert a pending clinic together with its administrator user.

        Raises:
            DuplicateError: If the clinic email, clinic hwid or user email is taken
        """

    @abstractmethod
    async def find_by_id(self, clinic_id: uuid.UUID) -> Optional[Clinic]:
        """
        Find a clinic by ID.

        Args:
            clinic_id: Clinic UUID

        Returns:
            Clinic entity or None if not found
        """

    @abstractmethod
    async def find_by_license_id(self, license_id: uuid.UUID) -> Optional[Clinic]:
        """Find the clinic bound to a license."""

    @abstractmethod
    async def get_profile(self, clinic_id: uuid.UUID) -> Optional[ClinicProfile]:
        """Clinic with its license and users, or None if not found."""

    @abstractmethod
    async def list_profiles(self, status: Optional[RegistrationStatus] = None) -> List[ClinicProfile]:
        """
        Clinics with license and users, newest first.

        Args:
            status: Only clinics in this status
        """

    @abstractmethod
    async def approve(self, clinic_id: uuid.UUID, plan: Plan, now: Optional[datetime] = None) -> ClinicProfile:
        """
        Approve a clinic and issue its license.

        The clinic row is locked for the whole operation. The license is
        an active CLINIC license under ``plan``; the clinic and its
        users become APPROVED.

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            ClinicAlreadyApprovedError: If the clinic is already approved
            InvalidClinicStatusError: If the clinic is suspended
            DuplicateSerialError: If no unique serial could be allocated
        """

    @abstractmethod
    async def reject(self, clinic_id: uuid.UUID) -> Clinic:
        """
        Reject a pending clinic and its users.

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            InvalidClinicStatusError: If the clinic is not pending
        """

    @abstractmethod
    async def toggle_suspension(self, clinic_id: uuid.UUID) -> Tuple[Clinic, Optional[License]]:
        """
        Suspend or reinstate a clinic; its users and license follow.

        A revoked license is left untouched.

        Returns:
            Tuple of (updated clinic, updated license or None)

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            InvalidClinicStatusError: If the clinic is pending or rejected
        """

    @abstractmethod
    async def delete(self, clinic_id: uuid.UUID) -> Optional[Clinic]:
        """
        Delete a clinic with its license and users.

        Returns:
            The deleted clinic, or None if not found
        """
