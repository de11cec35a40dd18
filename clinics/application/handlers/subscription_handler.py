"""
GetSubscriptionStatusHandler.

The polling endpoint clinic software calls to learn whether its users
may keep working. This is where server-side logout happens: whenever the
result says ``force_logout`` the clinic's sessions are deleted.
"""
import logging

from accounts.ports.session_repository import SessionRepository
from clinics.application.queries.clinic_queries import GetSubscriptionStatusQuery
from clinics.domain.events import SessionsRevoked
from clinics.domain.services import SubscriptionStatus, SubscriptionStatusResolver
from clinics.ports.clinic_repository import ClinicRepository
from core.domain.dates import utcnow
from core.domain.exceptions import ClinicNotFoundError
from core.infrastructure.events import event_bus
from core.metrics import forced_logouts_total
from plans.ports.plan_repository import PlanRepository

logger = logging.getLogger(__name__)


class GetSubscriptionStatusHandler:
    """Handler for GetSubscriptionStatusQuery."""

    def __init__(
        self,
        clinic_repository: ClinicRepository,
        plan_repository: PlanRepository,
        session_repository: SessionRepository,
    ):
        """Initialize handler with repositories."""
        self.clinic_repository = clinic_repository
        self.plan_repository = plan_repository
        self.session_repository = session_repository

    async def handle(self, query: GetSubscriptionStatusQuery) -> SubscriptionStatus:
        """
        Resolve the clinic's subscription status.

        Args:
            query: GetSubscriptionStatusQuery

        Returns:
            SubscriptionStatus

        Raises:
            ClinicNotFoundError: If the clinic does not exist
        """
        profile = await self.clinic_repository.get_profile(query.clinic_id)
        if profile is None:
            raise ClinicNotFoundError()

        license = profile.license
        plan = None
        if license is not None and license.plan_id:
            plan = await self.plan_repository.find_by_id(license.plan_id)

        status = SubscriptionStatusResolver.resolve(profile.clinic, license, plan, now=utcnow())

        if status.force_logout:
            revoked = await self.session_repository.delete_for_clinic(profile.clinic.id)
            if revoked:
                reason = (
                    "clinic_not_approved" if not profile.clinic.is_approved else "license_inactive"
                )
                forced_logouts_total.labels(reason=reason).inc()
                await event_bus.publish(
                    SessionsRevoked(clinic_id=profile.clinic.id, count=revoked, reason=reason)
                )
                logger.info(
                    "Clinic sessions revoked",
                    extra={"clinic_id": str(profile.clinic.id), "count": revoked, "reason": reason},
                )
        return status
