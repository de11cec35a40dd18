"""
System settings and remote configuration handlers.

Writes are upserts: keys that are not sent keep their stored value.
"""
from typing import Any, Dict

from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from releases.application.commands.release_commands import UpdateSettingsCommand
from releases.domain.settings import client_config, validate_entries
from releases.ports.settings_repository import SettingsRepository


class GetSystemSettingsHandler:
    def __init__(self, settings_repository: SettingsRepository):
        self.settings_repository = settings_repository

    async def handle(self) -> Dict[str, Any]:
        return await self.settings_repository.system_settings()


class UpdateSystemSettingsHandler:
    """Handler for UpdateSettingsCommand against the system settings."""

    def __init__(self, settings_repository: SettingsRepository, audit_log_repository: AuditLogRepository):
        self.settings_repository = settings_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: UpdateSettingsCommand) -> None:
        """
        Raises:
            DomainValidationError: If the payload is not a key/value map
        """
        await self.settings_repository.upsert_system_settings(validate_entries(command.entries))
        await self.audit.record(AuditAction.UPDATE_SETTINGS, "System settings updated", command.actor)


class GetRemoteConfigHandler:
    def __init__(self, settings_repository: SettingsRepository):
        self.settings_repository = settings_repository

    async def handle(self) -> Dict[str, Any]:
        return await self.settings_repository.remote_config()


class UpdateRemoteConfigHandler:
    """Handler for UpdateSettingsCommand against the remote configuration."""

    def __init__(self, settings_repository: SettingsRepository, audit_log_repository: AuditLogRepository):
        self.settings_repository = settings_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: UpdateSettingsCommand) -> None:
        """
        Raises:
            DomainValidationError: If the payload is not a key/value map
        """
        await self.settings_repository.upsert_remote_config(validate_entries(command.entries))
        await self.audit.record(AuditAction.UPDATE_REMOTE_CONFIG, "Remote config updated", command.actor)


class SyncClientConfigHandler:
    """Remote configuration merged over the client defaults."""

    def __init__(self, settings_repository: SettingsRepository):
        self.settings_repository = settings_repository

    async def handle(self) -> Dict[str, Any]:
        return client_config(await self.settings_repository.remote_config())
