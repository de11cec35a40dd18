"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.

``status`` and ``is_paused`` are two views of the same fact: every
transition below writes both, so ``is_paused`` is True exactly when
``status`` is PAUSED.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.dates import add_months, remaining_days, utcnow
from core.domain.exceptions import (
    DomainValidationError,
    LicenseExpiredError,
    LicensePausedError,
    LicenseRevokedError,
)
from core.domain.value_objects import LicenseStatus, ProductType


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents a serial sold under a plan, bound to one or more devices.
    This is an immutable value object with business logic.
    """

    id: uuid.UUID
    serial: str
    plan_id: Optional[uuid.UUID]
    product_type: ProductType
    customer_name: str
    status: LicenseStatus
    is_paused: bool
    device_limit: int
    expire_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    hardware_id: Optional[str] = None
    activation_date: Optional[datetime] = None
    activation_count: int = 0
    last_check_in: Optional[datetime] = None
    last_renewal_date: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.serial or not self.serial.strip():
            raise DomainValidationError("Serial is required")
        if self.device_limit < 0:
            raise DomainValidationError("deviceLimit cannot be negative")
        if self.activation_count < 0:
            raise DomainValidationError("activationCount cannot be negative")

    @classmethod
    def issue(
        cls,
        serial: str,
        plan_id: uuid.UUID,
        duration_months: int,
        device_limit: int,
        customer_name: str,
        product_type: ProductType = ProductType.POS,
        status: LicenseStatus = LicenseStatus.PENDING,
        now: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Issue a new license under a plan.

        Args:
            serial: Generated serial
            plan_id: Plan UUID
            duration_months: Plan duration; sets the expiration date
            device_limit: Devices allowed (0 = unlimited)
            customer_name: Customer or clinic name
            product_type: Product line
            status: Initial status (pending for stock, active for clinics)
            now: Issue time (defaults to utcnow)
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = now or utcnow()
        return cls(
            id=license_id or uuid.uuid4(),
            serial=serial,
            plan_id=plan_id,
            product_type=product_type,
            customer_name=customer_name,
            status=status,
            is_paused=status == LicenseStatus.PAUSED,
            device_limit=device_limit,
            expire_date=add_months(now, duration_months),
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the expiration date has passed.

        A license without an expiration date never expires.
        """
        if self.expire_date is None:
            return False
        return self.expire_date < (now or utcnow())

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """
        Check if license is currently valid.

        Args:
            now: Current time (defaults to utcnow)

        Returns:
            True if active, not paused and not expired
        """
        return (
            self.status == LicenseStatus.ACTIVE
            and not self.is_paused
            and not self.is_expired(now)
        )

    def remaining_days(self, now: Optional[datetime] = None) -> int:
        """Whole days until expiration, rounded up, never negative."""
        return remaining_days(self.expire_date, now or utcnow())

    def ensure_activatable(self, now: Optional[datetime] = None) -> None:
        """
        Check that a device may be activated on this license.

        Raises:
            LicenseRevokedError: If the license is revoked
            LicenseExpiredError: If the expiration date has passed
            LicensePausedError: If the license is paused
        """
        if self.status == LicenseStatus.REVOKED:
            raise LicenseRevokedError()
        if self.is_expired(now):
            raise LicenseExpiredError()
        if self.is_paused or self.status == LicenseStatus.PAUSED:
            raise LicensePausedError()

    def record_activation(self, hardware_id: str, now: Optional[datetime] = None) -> "License":
        """
        Return a copy reflecting a successful device activation.

        The license keeps only the most recent hardware ID even when
        several devices are bound.
        """
        now = now or utcnow()
        return replace(
            self,
            status=LicenseStatus.ACTIVE,
            is_paused=False,
            hardware_id=hardware_id,
            activation_count=self.activation_count + 1,
            activation_date=now,
            last_check_in=now,
            updated_at=now,
        )

    def touch(self, now: Optional[datetime] = None) -> "License":
        """Return a copy with last_check_in stamped."""
        now = now or utcnow()
        return replace(self, last_check_in=now, updated_at=now)

    def _ensure_not_revoked(self) -> None:
        if self.status == LicenseStatus.REVOKED:
            raise LicenseRevokedError()

    def pause(self) -> "License":
        """
        Return a paused copy.

        Raises:
            LicenseRevokedError: If the license is revoked
        """
        self._ensure_not_revoked()
        return replace(self, status=LicenseStatus.PAUSED, is_paused=True, updated_at=utcnow())

    def resume(self) -> "License":
        """
        Return an active, unpaused copy.

        Raises:
            LicenseRevokedError: If the license is revoked
        """
        self._ensure_not_revoked()
        return replace(self, status=LicenseStatus.ACTIVE, is_paused=False, updated_at=utcnow())

    def toggle_pause(self) -> "License":
        """Pause an unpaused license or resume a paused one."""
        return self.resume() if self.is_paused else self.pause()

    def revoke(self) -> "License":
        """Return a revoked copy. Revocation is terminal."""
        return replace(self, status=LicenseStatus.REVOKED, is_paused=False, updated_at=utcnow())

    def renew(self, months: int, now: Optional[datetime] = None) -> "License":
        """
        Extend the license by a number of months.

        The extension starts from the current expiration date, or from
        now when the license already expired (or never had one).

        Args:
            months: Number of months (> 0)
            now: Current time (defaults to utcnow)

        Returns:
            Renewed, active License copy

        Raises:
            DomainValidationError: If months is not positive
            LicenseRevokedError: If the license is revoked
        """
        if months < 1:
            raise DomainValidationError("months must be a positive integer")
        self._ensure_not_revoked()

        now = now or utcnow()
        base = self.expire_date if self.expire_date and self.expire_date > now else now
        return replace(
            self,
            expire_date=add_months(base, months),
            status=LicenseStatus.ACTIVE,
            is_paused=False,
            last_renewal_date=now,
            updated_at=now,
        )

    def with_admin_changes(
        self,
        customer_name: Optional[str] = None,
        hardware_id: Optional[str] = None,
        status: Optional[LicenseStatus] = None,
    ) -> "License":
        """
        Apply an explicit back-office edit.

        This is the only way out of the revoked state. An empty
        hardware_id clears the stored one.
        """
        changes = {"updated_at": utcnow()}
        if customer_name is not None:
            if len(customer_name.strip()) < 2:
                raise DomainValidationError("customerName must be at least 2 characters")
            changes["customer_name"] = customer_name.strip()
        if hardware_id is not None:
            changes["hardware_id"] = hardware_id or None
        if status is not None:
            changes["status"] = status
            changes["is_paused"] = status == LicenseStatus.PAUSED
        return replace(self, **changes)
