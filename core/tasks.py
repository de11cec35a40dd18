"""
Celery tasks for background processing.

The expiry sweep runs hourly from Celery beat (see
LicenseControlCenter.celery) and can be triggered with the
``check_license_expirations`` management command.
"""
import logging

from asgiref.sync import async_to_sync

from accounts.infrastructure.repositories.django_session_repository import DjangoSessionRepository
from clinics.infrastructure.repositories.django_clinic_repository import DjangoClinicRepository
from licenses.application.dto.license_dto import ExpirySweepResultDTO
from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from LicenseControlCenter.celery import app

logger = logging.getLogger(__name__)


def expire_licenses(dry_run: bool = False) -> ExpirySweepResultDTO:
    """Run one expiry sweep against the Django repositories."""
    handler = ExpireLicensesHandler(
        license_repository=DjangoLicenseRepository(),
        clinic_repository=DjangoClinicRepository(),
        session_repository=DjangoSessionRepository(),
    )
    return async_to_sync(handler.handle)(dry_run=dry_run)


@app.task(bind=True, max_retries=3)
def sweep_expired_licenses(self, dry_run: bool = False) -> dict:
    """
    Celery task for the license expiry sweep.

    Args:
        dry_run: Only report lapsed serials

    Returns:
        Summary with the number of expired licenses and revoked sessions
    """
    try:
        result = expire_licenses(dry_run=dry_run)
    except Exception as exc:
        logger.error("License expiry sweep failed: %s", exc, exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)
    return {"expired": len(result.expired), "sessions_revoked": result.sessions_revoked}
