"""
License lifecycle handlers.

Handlers for back-office edit, renew, pause toggle, revoke and delete.
Each one invalidates the cached validate result of the serial it touches.
"""
import logging
from typing import List, Optional

from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.dates import utcnow
from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import TransactionType
from core.infrastructure.events import event_bus
from core.metrics import license_state_changes_total, licenses_renewed_total
from licenses.application.commands.license_admin_commands import (
    DeleteLicenseCommand,
    RevokeLicenseCommand,
    ToggleLicensePauseCommand,
    UpdateLicenseCommand,
)
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.dto.license_dto import LicenseDetailDTO, PlanSummaryDTO
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.events import (
    LicenseDeleted,
    LicensePauseToggled,
    LicenseRenewed,
    LicenseRevoked,
    LicenseUpdated,
)
from licenses.domain.license import License
from licenses.domain.services import LicensePricing
from licenses.domain.transaction import Transaction
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.transaction_repository import TransactionRepository
from plans.ports.plan_repository import PlanRepository

logger = logging.getLogger(__name__)


async def _load(license_repository: LicenseRepository, license_id) -> License:
    license = await license_repository.find_by_id(license_id)
    if not license:
        raise LicenseNotFoundError()
    return license


class ListLicensesHandler:
    """Every license with its plan summary, newest first."""

    def __init__(self, license_repository: LicenseRepository, plan_repository: PlanRepository):
        self.license_repository = license_repository
        self.plan_repository = plan_repository

    async def handle(self) -> List[LicenseDetailDTO]:
        licenses = await self.license_repository.list_all()
        plans = {plan.id: plan for plan in await self.plan_repository.list_all()}
        return [
            LicenseDetailDTO(license=license, plan=PlanSummaryDTO.from_plan(plans.get(license.plan_id)))
            for license in licenses
        ]


class UpdateLicenseHandler:
    """Handler for UpdateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, audit_log_repository: AuditLogRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: UpdateLicenseCommand) -> License:
        """
        Handle update license command.

        Setting ``status`` also sets ``is_paused`` (True only for paused).

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await _load(self.license_repository, command.license_id)
        updated = await self.license_repository.save(
            license.with_admin_changes(
                customer_name=command.customer_name,
                hardware_id=command.hardware_id,
                status=command.status,
            )
        )

        await LicenseCacheService.invalidate(updated.serial)
        if command.status is not None and command.status != license.status:
            license_state_changes_total.labels(
                transition=f"{license.status.value}->{updated.status.value}"
            ).inc()
        await event_bus.publish(LicenseUpdated(license_id=updated.id, status=updated.status.value))
        await self.audit.record(AuditAction.UPDATE_LICENSE, f"Updated {updated.serial}", command.actor)
        return updated


class RenewLicenseHandler:
    """Handler for RenewLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        plan_repository: PlanRepository,
        transaction_repository: TransactionRepository,
        audit_log_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.plan_repository = plan_repository
        self.transaction_repository = transaction_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: RenewLicenseCommand) -> License:
        """
        Handle renew license command.

        Args:
            command: RenewLicenseCommand

        Returns:
            Renewed License entity

        Raises:
            LicenseNotFoundError: If license not found
            LicenseRevokedError: If the license is revoked
            DomainValidationError: If months is not positive
        """
        license = await _load(self.license_repository, command.license_id)
        now = utcnow()
        renewed = await self.license_repository.save(license.renew(command.months, now=now))

        plan = await self.plan_repository.find_by_id(renewed.plan_id) if renewed.plan_id else None
        if plan is not None:
            price = LicensePricing.renewal_price(plan, command.months)
            if price.amount > 0:
                await self.transaction_repository.add(
                    Transaction.record(
                        license_id=renewed.id,
                        customer_name=renewed.customer_name,
                        plan_name=plan.name,
                        price=price,
                        transaction_type=TransactionType.RENEWAL,
                        now=now,
                    )
                )

        await LicenseCacheService.invalidate(renewed.serial)
        licenses_renewed_total.labels(product_type=renewed.product_type.value).inc()
        await event_bus.publish(
            LicenseRenewed(
                license_id=renewed.id,
                months=command.months,
                new_expire_date=renewed.expire_date,
            )
        )
        await self.audit.record(
            AuditAction.RENEW_LICENSE,
            f"Renewed {renewed.serial} for {command.months} months",
            command.actor,
        )
        return renewed


class ToggleLicensePauseHandler:
    """Handler for ToggleLicensePauseCommand."""

    def __init__(self, license_repository: LicenseRepository, audit_log_repository: AuditLogRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: ToggleLicensePauseCommand) -> License:
        """
        Raises:
            LicenseNotFoundError: If license not found
            LicenseRevokedError: If the license is revoked
        """
        license = await _load(self.license_repository, command.license_id)
        toggled = await self.license_repository.save(license.toggle_pause())

        await LicenseCacheService.invalidate(toggled.serial)
        license_state_changes_total.labels(
            transition=f"{license.status.value}->{toggled.status.value}"
        ).inc()
        await event_bus.publish(LicensePauseToggled(license_id=toggled.id, is_paused=toggled.is_paused))
        await self.audit.record(AuditAction.TOGGLE_PAUSE, f"Pause toggle {toggled.serial}", command.actor)
        return toggled


class RevokeLicenseHandler:
    """Handler for RevokeLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, audit_log_repository: AuditLogRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: RevokeLicenseCommand) -> License:
        """
        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await _load(self.license_repository, command.license_id)
        revoked = await self.license_repository.save(license.revoke())

        await LicenseCacheService.invalidate(revoked.serial)
        license_state_changes_total.labels(transition=f"{license.status.value}->revoked").inc()
        await event_bus.publish(LicenseRevoked(license_id=revoked.id))
        await self.audit.record(AuditAction.REVOKE_LICENSE, f"Revoked {revoked.serial}", command.actor)
        return revoked


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, audit_log_repository: AuditLogRepository):
        self.license_repository = license_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeleteLicenseCommand) -> Optional[License]:
        """
        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await _load(self.license_repository, command.license_id)
        await self.license_repository.delete(license.id)

        await LicenseCacheService.invalidate(license.serial)
        await event_bus.publish(LicenseDeleted(license_id=license.id, serial=license.serial))
        await self.audit.record(AuditAction.DELETE_LICENSE, f"Deleted {license.serial}", command.actor)
        return license
