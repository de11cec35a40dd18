"""
Clinic domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from clinics.domain.clinic import Clinic
from core.domain.dates import utcnow
from core.domain.value_objects import LicenseStatus, RegistrationStatus
from licenses.domain.license import License
from plans.domain.plan import Plan


@dataclass(frozen=True)
class SubscriptionStatus:
    """Effective access state of a clinic as seen by its client software."""

    clinic_id: Any
    name: str
    status: RegistrationStatus
    license: Optional[Dict[str, Any]]
    remaining_days: int
    force_logout: bool


class SubscriptionStatusResolver:
    """
    Decides whether a clinic's users may keep working.

    Anything other than an approved clinic with an active, unpaused,
    unexpired license forces a logout.
    """

    @staticmethod
    def license_block(license: License, plan: Optional[Plan]) -> Dict[str, Any]:
        return {
            "id": license.id,
            "serial": license.serial,
            "status": license.status.value,
            "expireDate": license.expire_date,
            "deviceLimit": license.device_limit,
            "activationCount": license.activation_count,
            "plan": (
                {
                    "id": plan.id,
                    "name": plan.name,
                    "durationMonths": plan.duration_months,
                    "features": dict(plan.features),
                }
                if plan
                else None
            ),
        }

    @classmethod
    def resolve(
        cls,
        clinic: Clinic,
        license: Optional[License],
        plan: Optional[Plan] = None,
        now: Optional[datetime] = None,
    ) -> SubscriptionStatus:
        """
        Compute the subscription status of a clinic.

        Args:
            clinic: Clinic entity
            license: The clinic's license, if any
            plan: Plan of that license, if any
            now: Reference time (defaults to utcnow)

        Returns:
            SubscriptionStatus
        """
        now = now or utcnow()
        if clinic.status != RegistrationStatus.APPROVED or license is None:
            return SubscriptionStatus(
                clinic_id=clinic.id,
                name=clinic.name,
                status=clinic.status,
                license=None,
                remaining_days=0,
                force_logout=True,
            )

        remaining = license.remaining_days(now)
        is_license_active = (
            license.status == LicenseStatus.ACTIVE
            and not license.is_paused
            and (license.expire_date is None or remaining > 0)
        )
        return SubscriptionStatus(
            clinic_id=clinic.id,
            name=clinic.name,
            status=clinic.status,
            license=cls.license_block(license, plan),
            remaining_days=remaining,
            force_logout=not is_license_active,
        )
