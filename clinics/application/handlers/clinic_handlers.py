"""
Clinic registration and review handlers.
"""
import logging
from typing import List, Optional

from accounts.domain.user import User, validate_password
from accounts.ports.session_repository import SessionRepository
from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from clinics.application.commands.clinic_commands import (
    ApproveClinicCommand,
    DeleteClinicCommand,
    RegisterClinicCommand,
    RejectClinicCommand,
    ToggleClinicStatusCommand,
)
from clinics.application.queries.clinic_queries import ListClinicsQuery
from clinics.domain.clinic import Clinic, ClinicProfile
from clinics.domain.events import (
    ClinicApproved,
    ClinicDeleted,
    ClinicRegistered,
    ClinicStatusChanged,
    SessionsRevoked,
)
from clinics.ports.clinic_repository import ClinicRepository
from core.domain.exceptions import (
    ClinicNotFoundError,
    NoActivePlanError,
    PlanNotFoundError,
    StateConflictError,
)
from core.domain.value_objects import RegistrationStatus, Role
from core.infrastructure.events import event_bus
from core.metrics import (
    clinic_decisions_total,
    clinic_registrations_total,
    forced_logouts_total,
    licenses_generated_total,
)
from licenses.application.services.license_cache_service import LicenseCacheService
from plans.domain.plan import Plan
from plans.ports.plan_repository import PlanRepository

logger = logging.getLogger(__name__)


async def _load(clinic_repository: ClinicRepository, clinic_id) -> Clinic:
    clinic = await clinic_repository.find_by_id(clinic_id)
    if not clinic:
        raise ClinicNotFoundError()
    return clinic


class RegisterClinicHandler:
    """Handler for RegisterClinicCommand."""

    def __init__(self, clinic_repository: ClinicRepository, audit_log_repository: AuditLogRepository):
        """Initialize handler with repositories."""
        self.clinic_repository = clinic_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: RegisterClinicCommand) -> ClinicProfile:
        """
        Register a pending clinic and its clinic_admin user.

        Args:
            command: RegisterClinicCommand

        Returns:
            ClinicProfile with the created user

        Raises:
            DomainValidationError: If a field is malformed
            DuplicateError: If the clinic email, hwid or user email is taken
        """
        password = validate_password(command.password)
        clinic = Clinic.register(
            name=command.name or "",
            email=command.email,
            hwid=command.hwid or "",
            doctor_name=command.doctor_name,
            phone=command.phone,
            address=command.address,
            system_version=command.system_version,
        )
        admin = User.create(
            name=command.doctor_name or clinic.name,
            email=clinic.email,
            role=Role.CLINIC_ADMIN,
            status=RegistrationStatus.PENDING,
            clinic_id=clinic.id,
        )

        profile = await self.clinic_repository.register(clinic, admin, password)

        clinic_registrations_total.inc()
        await event_bus.publish(ClinicRegistered(clinic_id=clinic.id, name=clinic.name))
        await self.audit.record(AuditAction.REGISTER_CLINIC, f"Registered clinic {clinic.name}", command.actor)
        return profile


class ListClinicsHandler:
    """Clinics with license and users, newest first."""

    def __init__(self, clinic_repository: ClinicRepository):
        self.clinic_repository = clinic_repository

    async def handle(self, query: ListClinicsQuery) -> List[ClinicProfile]:
        return await self.clinic_repository.list_profiles(status=query.status)


class ApproveClinicHandler:
    """Handler for ApproveClinicCommand."""

    def __init__(
        self,
        clinic_repository: ClinicRepository,
        plan_repository: PlanRepository,
        audit_log_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.clinic_repository = clinic_repository
        self.plan_repository = plan_repository
        self.audit = AuditTrail(audit_log_repository)

    async def _select_plan(self, plan_id) -> Plan:
        if plan_id is None:
            plan = await self.plan_repository.first_active()
            if plan is None:
                raise NoActivePlanError()
            return plan

        plan = await self.plan_repository.find_by_id(plan_id)
        if plan is None:
            raise PlanNotFoundError()
        if not plan.is_active:
            raise StateConflictError("Plan is not active", code="PLAN_INACTIVE")
        return plan

    async def handle(self, command: ApproveClinicCommand) -> ClinicProfile:
        """
        Approve a clinic and issue its CLINIC license.

        Without an explicit plan the earliest-created active plan is used.

        Args:
            command: ApproveClinicCommand

        Returns:
            Updated ClinicProfile

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            ClinicAlreadyApprovedError: If the clinic is already approved
            PlanNotFoundError: If the requested plan does not exist
            NoActivePlanError: If no active plan exists
        """
        clinic = await _load(self.clinic_repository, command.clinic_id)
        clinic.ensure_approvable()
        plan = await self._select_plan(command.plan_id)

        profile = await self.clinic_repository.approve(clinic.id, plan)

        clinic_decisions_total.labels(decision="approved").inc()
        licenses_generated_total.labels(product_type="CLINIC", source="clinic_approval").inc()
        await event_bus.publish(
            ClinicApproved(clinic_id=clinic.id, license_id=profile.clinic.license_id, plan_id=plan.id)
        )
        await self.audit.record(AuditAction.APPROVE_CLINIC, f"Approved clinic {clinic.name}", command.actor)
        logger.info(
            "Clinic approved",
            extra={"clinic_id": str(clinic.id), "plan_id": str(plan.id)},
        )
        return profile


class RejectClinicHandler:
    """Handler for RejectClinicCommand."""

    def __init__(self, clinic_repository: ClinicRepository, audit_log_repository: AuditLogRepository):
        self.clinic_repository = clinic_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: RejectClinicCommand) -> Clinic:
        """
        Raises:
            ClinicNotFoundError: If the clinic does not exist
            InvalidClinicStatusError: If the clinic is not pending
        """
        clinic = await self.clinic_repository.reject(command.clinic_id)

        clinic_decisions_total.labels(decision="rejected").inc()
        await event_bus.publish(ClinicStatusChanged(clinic_id=clinic.id, status=clinic.status.value))
        await self.audit.record(AuditAction.REJECT_CLINIC, f"Rejected clinic {clinic.name}", command.actor)
        return clinic


class ToggleClinicStatusHandler:
    """Handler for ToggleClinicStatusCommand."""

    def __init__(
        self,
        clinic_repository: ClinicRepository,
        session_repository: SessionRepository,
        audit_log_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.clinic_repository = clinic_repository
        self.session_repository = session_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: ToggleClinicStatusCommand) -> RegistrationStatus:
        """
        Suspend or reinstate a clinic.

        Suspension pauses the clinic's license and logs out its users;
        reinstatement resumes the license.

        Returns:
            The clinic's new status

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            InvalidClinicStatusError: If the clinic is pending or rejected
        """
        clinic, license = await self.clinic_repository.toggle_suspension(command.clinic_id)

        if license is not None:
            await LicenseCacheService.invalidate(license.serial)

        if clinic.status == RegistrationStatus.SUSPENDED:
            revoked = await self.session_repository.delete_for_clinic(clinic.id)
            if revoked:
                forced_logouts_total.labels(reason="clinic_suspended").inc()
                await event_bus.publish(
                    SessionsRevoked(clinic_id=clinic.id, count=revoked, reason="clinic_suspended")
                )

        clinic_decisions_total.labels(decision=clinic.status.value.lower()).inc()
        await event_bus.publish(ClinicStatusChanged(clinic_id=clinic.id, status=clinic.status.value))
        await self.audit.record(
            AuditAction.TOGGLE_CLINIC_STATUS,
            f"Toggled clinic {clinic.name} to {clinic.status.value}",
            command.actor,
        )
        return clinic.status


class DeleteClinicHandler:
    """Handler for DeleteClinicCommand."""

    def __init__(self, clinic_repository: ClinicRepository, audit_log_repository: AuditLogRepository):
        self.clinic_repository = clinic_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeleteClinicCommand) -> Optional[Clinic]:
        """
        Raises:
            ClinicNotFoundError: If the clinic does not exist
        """
        profile = await self.clinic_repository.get_profile(command.clinic_id)
        if profile is None:
            raise ClinicNotFoundError()

        clinic = await self.clinic_repository.delete(command.clinic_id)
        if clinic is None:
            raise ClinicNotFoundError()
        if profile.license is not None:
            await LicenseCacheService.invalidate(profile.license.serial)

        await event_bus.publish(ClinicDeleted(clinic_id=clinic.id, name=clinic.name))
        await self.audit.record(AuditAction.DELETE_CLINIC, f"Deleted clinic {clinic.name}", command.actor)
        return clinic
