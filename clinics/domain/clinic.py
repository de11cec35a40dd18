"""
Clinic domain entity.

A clinic is a tenant of the clinic product. It self-registers as
PENDING and is approved, rejected, suspended or reinstated by an admin.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from accounts.domain.user import User
from core.domain.dates import utcnow
from core.domain.exceptions import (
    ClinicAlreadyApprovedError,
    DomainValidationError,
    InvalidClinicStatusError,
)
from core.domain.value_objects import Email, RegistrationStatus
from licenses.domain.license import License


@dataclass(frozen=True)
class Clinic:
    """
    Clinic domain entity.

    ``license_id`` is set on approval and points at the CLINIC license
    issued for the tenant.
    """

    id: uuid.UUID
    name: str
    email: str
    hwid: str
    status: RegistrationStatus
    created_at: datetime
    updated_at: datetime
    doctor_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    system_version: Optional[str] = None
    license_id: Optional[uuid.UUID] = None

    def __post_init__(self):
        """Validate clinic entity."""
        if not self.name or len(self.name.strip()) < 2:
            raise DomainValidationError("name must be at least 2 characters")
        if not self.hwid or len(self.hwid.strip()) < 5:
            raise DomainValidationError("hwid must be at least 5 characters")

    @classmethod
    def register(
        cls,
        name: str,
        email: str,
        hwid: str,
        doctor_name: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        system_version: Optional[str] = None,
        clinic_id: Optional[uuid.UUID] = None,
    ) -> "Clinic":
        """
        Create a pending clinic from a self-registration.

        Raises:
            DomainValidationError: If a field is malformed
        """
        try:
            normalized_email = str(Email(email))
        except ValueError as e:
            raise DomainValidationError("email must be a valid email address") from e

        now = utcnow()
        return cls(
            id=clinic_id or uuid.uuid4(),
            name=name.strip(),
            email=normalized_email,
            hwid=hwid.strip(),
            status=RegistrationStatus.PENDING,
            created_at=now,
            updated_at=now,
            doctor_name=doctor_name,
            phone=phone,
            address=address,
            system_version=system_version,
        )

    @property
    def is_approved(self) -> bool:
        return self.status == RegistrationStatus.APPROVED

    def ensure_approvable(self) -> None:
        """
        Check that the clinic may be approved.

        Pending and rejected clinics can be approved. A suspended clinic
        keeps its license and is reinstated with toggle_suspension.

        Raises:
            ClinicAlreadyApprovedError: If the clinic is already approved
            InvalidClinicStatusError: If the clinic is suspended
        """
        if self.status == RegistrationStatus.APPROVED:
            raise ClinicAlreadyApprovedError()
        if self.status == RegistrationStatus.SUSPENDED:
            raise InvalidClinicStatusError("Suspended clinics are reinstated, not approved")

    def approve(self, license_id: uuid.UUID) -> "Clinic":
        """Return an approved copy bound to its new license."""
        self.ensure_approvable()
        return replace(self, status=RegistrationStatus.APPROVED, license_id=license_id, updated_at=utcnow())

    def reject(self) -> "Clinic":
        """
        Return a rejected copy.

        Raises:
            InvalidClinicStatusError: If the clinic is not pending
        """
        if self.status != RegistrationStatus.PENDING:
            raise InvalidClinicStatusError("Only pending clinics can be rejected")
        return replace(self, status=RegistrationStatus.REJECTED, updated_at=utcnow())

    def toggle_suspension(self) -> "Clinic":
        """
        Suspend an approved clinic or reinstate a suspended one.

        Raises:
            InvalidClinicStatusError: If the clinic is pending or rejected
        """
        if self.status == RegistrationStatus.APPROVED:
            new_status = RegistrationStatus.SUSPENDED
        elif self.status == RegistrationStatus.SUSPENDED:
            new_status = RegistrationStatus.APPROVED
        else:
            raise InvalidClinicStatusError(
                f"Cannot toggle a clinic in status {self.status.value}"
            )
        return replace(self, status=new_status, updated_at=utcnow())


@dataclass(frozen=True)
class ClinicProfile:
    """A clinic together with its license and users."""

    clinic: Clinic
    license: Optional[License] = None
    users: List[User] = field(default_factory=list)
