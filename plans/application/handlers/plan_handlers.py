"""
Plan handlers.

Create, update, delete and (de)activate plans, and list them for the
admin dashboard, the public pricing page and POS terminals.
"""
import logging
from typing import List

from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import PlanNotFoundError
from plans.application.commands.plan_commands import (
    CreatePlanCommand,
    DeletePlanCommand,
    SetPlanActiveCommand,
    UpdatePlanCommand,
)
from plans.application.dto.plan_dto import PlanCatalogEntryDTO
from plans.domain.plan import Plan
from plans.ports.currency_repository import CurrencyRepository
from plans.ports.plan_repository import PlanRepository

logger = logging.getLogger(__name__)


class CreatePlanHandler:
    """Handler for CreatePlanCommand."""

    def __init__(self, plan_repository: PlanRepository, audit_log_repository: AuditLogRepository):
        """Initialize handler with repositories."""
        self.plan_repository = plan_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: CreatePlanCommand) -> Plan:
        """
        Handle create plan command.

        Args:
            command: CreatePlanCommand

        Returns:
            Created Plan entity

        Raises:
            DomainValidationError: If the plan fields are invalid
        """
        plan = Plan.create(
            name=command.name,
            duration_months=command.duration_months,
            device_limit=command.device_limit,
            prices=command.prices,
            features=command.features,
            limits=command.limits,
            is_active=command.is_active,
            price_usd=command.price_usd,
        )
        saved = await self.plan_repository.save(plan)
        await self.audit.record(AuditAction.PLAN_CREATE, f"Created plan {saved.name}", command.actor)
        logger.info("Plan created", extra={"plan_id": str(saved.id)})
        return saved


class UpdatePlanHandler:
    """Handler for UpdatePlanCommand."""

    def __init__(self, plan_repository: PlanRepository, audit_log_repository: AuditLogRepository):
        """Initialize handler with repositories."""
        self.plan_repository = plan_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: UpdatePlanCommand) -> Plan:
        """
        Handle update plan command. Prices are replaced as a whole.

        Raises:
            PlanNotFoundError: If plan not found
        """
        plan = await self.plan_repository.find_by_id(command.plan_id)
        if not plan:
            raise PlanNotFoundError()

        updated = plan.update(
            name=command.name,
            duration_months=command.duration_months,
            device_limit=command.device_limit,
            prices=command.prices,
            features=command.features,
            limits=command.limits,
            is_active=command.is_active,
            price_usd=command.price_usd,
        )
        saved = await self.plan_repository.save(updated)
        await self.audit.record(AuditAction.PLAN_UPDATE, f"Updated plan {saved.name}", command.actor)
        return saved


class DeletePlanHandler:
    """Handler for DeletePlanCommand."""

    def __init__(self, plan_repository: PlanRepository, audit_log_repository: AuditLogRepository):
        self.plan_repository = plan_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeletePlanCommand) -> None:
        """
        Raises:
            PlanNotFoundError: If plan not found
            StateConflictError: If licenses were issued under the plan
        """
        plan = await self.plan_repository.find_by_id(command.plan_id)
        if not plan:
            raise PlanNotFoundError()
        await self.plan_repository.delete(plan.id)
        await self.audit.record(AuditAction.PLAN_DELETE, f"Deleted plan {plan.name}", command.actor)


class SetPlanActiveHandler:
    """Handler for SetPlanActiveCommand."""

    def __init__(self, plan_repository: PlanRepository, audit_log_repository: AuditLogRepository):
        self.plan_repository = plan_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: SetPlanActiveCommand) -> Plan:
        """
        Raises:
            PlanNotFoundError: If plan not found
        """
        plan = await self.plan_repository.find_by_id(command.plan_id)
        if not plan:
            raise PlanNotFoundError()

        saved = await self.plan_repository.save(plan.set_active(command.is_active))
        if command.is_active:
            await self.audit.record(AuditAction.PLAN_ACTIVATE, f"Activated plan {saved.name}", command.actor)
        else:
            await self.audit.record(AuditAction.PLAN_DEACTIVATE, f"Deactivated plan {saved.name}", command.actor)
        return saved


class ListPlansHandler:
    """List plans, optionally only the active ones."""

    def __init__(self, plan_repository: PlanRepository):
        self.plan_repository = plan_repository

    async def handle(self, active_only: bool = False) -> List[Plan]:
        return await self.plan_repository.list_all(active_only=active_only)


class GetPlanCatalogHandler:
    """
    Active plans priced in every configured currency.

    Used by POS terminals to render their purchase screen.
    """

    def __init__(self, plan_repository: PlanRepository, currency_repository: CurrencyRepository):
        self.plan_repository = plan_repository
        self.currency_repository = currency_repository

    async def handle(self) -> List[PlanCatalogEntryDTO]:
        plans = await self.plan_repository.list_all(active_only=True)
        currencies = await self.currency_repository.list_all()
        return [
            PlanCatalogEntryDTO(
                plan=plan,
                prices=[plan.quote(currency.code, currency.rate) for currency in currencies],
            )
            for plan in plans
        ]
