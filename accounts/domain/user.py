"""
User domain entity.

Back-office staff and clinic administrators. Password hashes never
leave the infrastructure layer.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.dates import utcnow
from core.domain.exceptions import AccountInactiveError, DomainValidationError
from core.domain.value_objects import Email, RegistrationStatus, Role

MIN_PASSWORD_LENGTH = 6


def validate_password(password: Optional[str]) -> str:
    """
    Check a plain-text password before it is hashed.

    Raises:
        DomainValidationError: If the password is too short
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise DomainValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
    return password


@dataclass(frozen=True)
class User:
    """
    User domain entity.

    Clinic administrators belong to a clinic and follow its
    registration status; staff users have no clinic.
    """

    id: uuid.UUID
    name: str
    email: str
    role: Role
    status: RegistrationStatus
    created_at: datetime
    clinic_id: Optional[uuid.UUID] = None
    last_login: Optional[datetime] = None
    last_login_ip: Optional[str] = None

    def __post_init__(self):
        """Validate user entity."""
        if not self.name or not self.name.strip():
            raise DomainValidationError("name is required")

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        role: Role = Role.VIEWER,
        status: RegistrationStatus = RegistrationStatus.APPROVED,
        clinic_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> "User":
        """
        Create a new User entity.

        Args:
            name: Display name
            email: Login email (normalised to lower case)
            role: Back-office role
            status: Registration status (staff users start approved)
            clinic_id: Owning clinic for clinic administrators
            user_id: Optional UUID (generated if not provided)

        Returns:
            User entity instance

        Raises:
            DomainValidationError: If the email is malformed
        """
        try:
            normalized_email = str(Email(email))
        except ValueError as e:
            raise DomainValidationError("email must be a valid email address") from e

        return cls(
            id=user_id or uuid.uuid4(),
            name=name.strip() if name else name,
            email=normalized_email,
            role=role,
            status=status,
            created_at=utcnow(),
            clinic_id=clinic_id,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_approved(self) -> bool:
        return self.status == RegistrationStatus.APPROVED

    def ensure_can_sign_in(self, clinic_status: Optional[RegistrationStatus] = None) -> None:
        """
        Check that the user (and its clinic, if any) is approved.

        Args:
            clinic_status: Status of the user's clinic, when it has one

        Raises:
            AccountInactiveError: If the user or its clinic is not approved
        """
        if not self.is_approved:
            raise AccountInactiveError(f"Account is {self.status.value.lower()}")
        if self.clinic_id and clinic_status is not None and clinic_status != RegistrationStatus.APPROVED:
            raise AccountInactiveError(f"Clinic is {clinic_status.value.lower()}")

    def signed_in(self, ip_address: Optional[str], now: Optional[datetime] = None) -> "User":
        """Return a copy stamped with the login time and address."""
        return replace(self, last_login=now or utcnow(), last_login_ip=ip_address)
