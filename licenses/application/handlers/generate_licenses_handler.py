"""
Generate licenses handler.

Issues a batch of pending POS licenses under a plan and records a
purchase transaction for each paid one.
"""
import logging
from typing import List

from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError, DuplicateSerialError, PlanNotFoundError
from core.domain.value_objects import TransactionType
from core.infrastructure.events import event_bus
from core.metrics import licenses_generated_total
from licenses.application.commands.generate_licenses import MAX_BATCH_SIZE, GenerateLicensesCommand
from licenses.domain.events import LicenseGenerated
from licenses.domain.license import License
from licenses.domain.services import LicenseIssuer, LicensePricing
from licenses.domain.transaction import Transaction
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.transaction_repository import TransactionRepository
from plans.ports.plan_repository import PlanRepository

logger = logging.getLogger(__name__)


class GenerateLicensesHandler:
    """Handler for GenerateLicensesCommand."""

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

    async def handle(self, command: GenerateLicensesCommand) -> List[License]:
        """
        Handle generate licenses command.

        Args:
            command: GenerateLicensesCommand

        Returns:
            List of generated License entities

        Raises:
            DomainValidationError: If customer name or quantity are invalid
            PlanNotFoundError: If the plan does not exist
            DuplicateSerialError: If no unique serial could be allocated
        """
        customer_name = (command.customer_name or "").strip()
        if len(customer_name) < 2:
            raise DomainValidationError("customerName must be at least 2 characters")
        if not 1 <= command.quantity <= MAX_BATCH_SIZE:
            raise DomainValidationError(f"quantity must be between 1 and {MAX_BATCH_SIZE}")

        plan = await self.plan_repository.find_by_id(command.plan_id)
        if not plan:
            raise PlanNotFoundError()

        price = LicensePricing.purchase_price(plan)
        now = utcnow()
        created: List[License] = []

        for _ in range(command.quantity):
            license = await self._insert_with_fresh_serial(plan, customer_name, now)
            created.append(license)

            if not price.is_zero():
                await self.transaction_repository.add(
                    Transaction.record(
                        license_id=license.id,
                        customer_name=customer_name,
                        plan_name=plan.name,
                        price=price,
                        transaction_type=TransactionType.PURCHASE,
                        now=now,
                    )
                )

            licenses_generated_total.labels(product_type=license.product_type.value, source="admin").inc()
            await event_bus.publish(
                LicenseGenerated(
                    license_id=license.id,
                    serial=license.serial,
                    plan_id=plan.id,
                    product_type=license.product_type.value,
                )
            )

        await self.audit.record(
            AuditAction.GENERATE_LICENSE,
            f"Generated {len(created)} licenses for {plan.name}",
            command.actor,
        )
        logger.info(
            "Licenses generated",
            extra={"plan_id": str(plan.id), "count": len(created)},
        )
        return created

    async def _insert_with_fresh_serial(self, plan, customer_name, now) -> License:
        for candidate in LicenseIssuer.candidates(plan, customer_name, now=now):
            try:
                return await self.license_repository.insert(candidate)
            except DuplicateSerialError:
                logger.warning("Serial collision, retrying", extra={"serial": candidate.serial})
        raise DuplicateSerialError()
