"""
Clinic controls handlers.

Reads are public so the clinic software can query its entitlements
before anyone logs in. Every admin write leaves one audit line with the
exact field changes and the full before and after state.
"""
from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from clinics.application.commands.clinic_commands import UpdateClinicControlsCommand
from clinics.application.queries.clinic_queries import GetClinicControlsQuery
from clinics.domain.controls import ClinicControl, describe_changes
from clinics.ports.clinic_repository import ClinicRepository
from clinics.ports.control_repository import ClinicControlRepository
from core.domain.exceptions import ClinicNotFoundError


class GetClinicControlsHandler:
    """Handler for GetClinicControlsQuery."""

    def __init__(self, clinic_repository: ClinicRepository, control_repository: ClinicControlRepository):
        self.clinic_repository = clinic_repository
        self.control_repository = control_repository

    async def handle(self, query: GetClinicControlsQuery) -> ClinicControl:
        """
        Return the controls, creating the defaults on first read.

        Raises:
            ClinicNotFoundError: If the clinic does not exist
        """
        clinic = await self.clinic_repository.find_by_id(query.clinic_id)
        if not clinic:
            raise ClinicNotFoundError()
        return await self.control_repository.get_or_create(clinic.id)


class UpdateClinicControlsHandler:
    """Handler for UpdateClinicControlsCommand."""

    def __init__(
        self,
        clinic_repository: ClinicRepository,
        control_repository: ClinicControlRepository,
        audit_log_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.clinic_repository = clinic_repository
        self.control_repository = control_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: UpdateClinicControlsCommand) -> ClinicControl:
        """
        Apply a partial update; feature flags are merged key by key.

        Args:
            command: UpdateClinicControlsCommand

        Returns:
            Updated ClinicControl

        Raises:
            ClinicNotFoundError: If the clinic does not exist
            DomainValidationError: If locking without a reason
        """
        clinic = await self.clinic_repository.find_by_id(command.clinic_id)
        if not clinic:
            raise ClinicNotFoundError()

        before = await self.control_repository.get_or_create(clinic.id)
        after = await self.control_repository.save(before.apply(command.update))

        await self.audit.record(
            AuditAction.UPDATE_CLINIC_CONTROLS,
            describe_changes(clinic.name, before, after),
            command.actor,
        )
        return after
