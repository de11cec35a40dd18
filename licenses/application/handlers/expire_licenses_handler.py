"""
ExpireLicensesHandler.

Periodic sweep that marks lapsed active licenses as expired and logs out
the clinics bound to them.
"""
import logging

from accounts.ports.session_repository import SessionRepository
from clinics.ports.clinic_repository import ClinicRepository
from core.domain.dates import utcnow
from core.infrastructure.events import event_bus
from core.metrics import forced_logouts_total, license_state_changes_total
from licenses.application.dto.license_dto import ExpirySweepResultDTO
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.events import LicenseExpired
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ExpireLicensesHandler:
    """Marks active licenses whose expiration date passed as expired."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        clinic_repository: ClinicRepository,
        session_repository: SessionRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.clinic_repository = clinic_repository
        self.session_repository = session_repository

    async def handle(self, dry_run: bool = False) -> ExpirySweepResultDTO:
        """
        Run one expiry sweep.

        Each license is expired with a conditional update, so a renewal
        committed after the lapsed list was read keeps the license active.

        Args:
            dry_run: Report lapsed serials without changing anything

        Returns:
            ExpirySweepResultDTO with the expired serials
        """
        now = utcnow()
        lapsed = await self.license_repository.find_lapsed(now)
        if dry_run:
            return ExpirySweepResultDTO(expired=[license.serial for license in lapsed], dry_run=True)

        result = ExpirySweepResultDTO()
        for license in lapsed:
            if not await self.license_repository.expire_if_lapsed(license.id, now):
                logger.info("License changed during expiry sweep; skipped", extra={"serial": license.serial})
                continue
            await LicenseCacheService.invalidate(license.serial)
            license_state_changes_total.labels(transition="active->expired").inc()
            result.expired.append(license.serial)

            clinic = await self.clinic_repository.find_by_license_id(license.id)
            if clinic is not None:
                revoked = await self.session_repository.delete_for_clinic(clinic.id)
                if revoked:
                    forced_logouts_total.labels(reason="license_expired").inc()
                result.sessions_revoked += revoked

            await event_bus.publish(LicenseExpired(license_id=license.id, serial=license.serial))

        logger.info(
            "License expiry sweep finished",
            extra={"expired": len(result.expired), "sessions_revoked": result.sessions_revoked},
        )
        return result
