"""
App version handlers.
"""
from typing import List, Optional

from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import AppVersionNotFoundError
from releases.application.commands.release_commands import (
    DeleteVersionCommand,
    PublishVersionCommand,
    UpdateVersionCommand,
)
from releases.domain.app_version import AppVersion, UpdateCheck
from releases.ports.app_version_repository import AppVersionRepository


class ListVersionsHandler:
    """Every version, newest release first."""

    def __init__(self, version_repository: AppVersionRepository):
        self.version_repository = version_repository

    async def handle(self) -> List[AppVersion]:
        return await self.version_repository.list_all()


class LatestVersionHandler:
    """Newest active release, or None."""

    def __init__(self, version_repository: AppVersionRepository):
        self.version_repository = version_repository

    async def handle(self) -> Optional[AppVersion]:
        return await self.version_repository.latest_active()


class CheckForUpdateHandler:
    """Compares a client's version with the newest active release."""

    def __init__(self, version_repository: AppVersionRepository):
        self.version_repository = version_repository

    async def handle(self, current_version: Optional[str]) -> UpdateCheck:
        latest = await self.version_repository.latest_active()
        return UpdateCheck.against(latest, current_version)


class PublishVersionHandler:
    """Handler for PublishVersionCommand."""

    def __init__(self, version_repository: AppVersionRepository, audit_log_repository: AuditLogRepository):
        self.version_repository = version_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: PublishVersionCommand) -> AppVersion:
        """
        Raises:
            DomainValidationError: If version or download URL is invalid
        """
        version = AppVersion.publish(
            version=command.version,
            download_url=command.download_url,
            release_notes=command.release_notes,
            force_update=command.force_update,
            is_active=command.is_active,
        )
        saved = await self.version_repository.add(version)
        await self.audit.record(AuditAction.CREATE_VERSION, saved.version, command.actor)
        return saved


class UpdateVersionHandler:
    """Handler for UpdateVersionCommand."""

    def __init__(self, version_repository: AppVersionRepository, audit_log_repository: AuditLogRepository):
        self.version_repository = version_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: UpdateVersionCommand) -> AppVersion:
        """
        Raises:
            AppVersionNotFoundError: If the version does not exist
            DomainValidationError: If a new value is invalid
        """
        current = await self.version_repository.find_by_id(command.version_id)
        if current is None:
            raise AppVersionNotFoundError()
        saved = await self.version_repository.save(
            current.with_changes(
                version=command.version,
                download_url=command.download_url,
                release_notes=command.release_notes,
                force_update=command.force_update,
                is_active=command.is_active,
            )
        )
        await self.audit.record(AuditAction.UPDATE_VERSION, str(saved.id), command.actor)
        return saved


class DeleteVersionHandler:
    """Handler for DeleteVersionCommand."""

    def __init__(self, version_repository: AppVersionRepository, audit_log_repository: AuditLogRepository):
        self.version_repository = version_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeleteVersionCommand) -> None:
        if not await self.version_repository.delete(command.version_id):
            raise AppVersionNotFoundError()
        await self.audit.record(AuditAction.DELETE_VERSION, str(command.version_id), command.actor)
