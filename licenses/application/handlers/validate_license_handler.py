"""
ValidateLicenseHandler.

Side-effect-free check of a serial for the client surfaces.
"""
import logging

from core.domain.dates import utcnow
from core.metrics import cache_hits_total, cache_misses_total
from licenses.application.dto.license_dto import PlanSummaryDTO, ValidationResultDTO
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.application.services.license_cache_service import LicenseCacheService, capped_validation_ttl
from licenses.ports.license_repository import LicenseRepository
from plans.ports.plan_repository import PlanRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository, plan_repository: PlanRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.plan_repository = plan_repository

    async def handle(self, query: ValidateLicenseQuery) -> ValidationResultDTO:
        """
        Handle validate license query.

        Unknown serials are not an error: the result has ``found=False``
        and every other field empty.

        Args:
            query: ValidateLicenseQuery

        Returns:
            ValidationResultDTO
        """
        serial = (query.serial or "").strip()
        if not serial:
            return ValidationResultDTO.not_found()

        cached = await LicenseCacheService.get_validation(serial)
        if cached:
            cache_hits_total.labels(cache_key="license_validation").inc()
            return cached
        cache_misses_total.labels(cache_key="license_validation").inc()

        license = await self.license_repository.find_by_serial(serial)
        if not license:
            # Not cached so a serial issued right after still validates.
            return ValidationResultDTO.not_found()

        plan = await self.plan_repository.find_by_id(license.plan_id) if license.plan_id else None
        now = utcnow()
        result = ValidationResultDTO(
            found=True,
            valid=license.is_valid(now),
            status=license.status.value,
            is_paused=license.is_paused,
            expire_date=license.expire_date,
            days_left=license.remaining_days(now),
            license_id=license.id,
            plan=PlanSummaryDTO.from_plan(plan),
        )

        ttl = capped_validation_ttl(license.expire_date, now)
        if ttl > 0:
            await LicenseCacheService.set_validation(serial, result, ttl=ttl)
        return result
