"""
Clinic support message handlers.
"""
from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import SupportMessageNotFoundError
from support.application.commands.support_commands import (
    ChangeSupportMessageStatusCommand,
    DeleteSupportMessageCommand,
    ReadSupportMessageCommand,
    SubmitSupportMessageCommand,
)
from support.application.queries.support_queries import SearchSupportMessagesQuery, SupportInboxDTO
from support.domain.support_message import MessageStatus, SupportMessage
from support.ports.support_message_repository import SupportMessageRepository

INBOX_LIMIT = 100


async def _load(repository: SupportMessageRepository, message_id) -> SupportMessage:
    message = await repository.find_by_id(message_id)
    if message is None:
        raise SupportMessageNotFoundError()
    return message


class SubmitSupportMessageHandler:
    """Handler for SubmitSupportMessageCommand."""

    def __init__(self, message_repository: SupportMessageRepository, audit_log_repository: AuditLogRepository):
        self.message_repository = message_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: SubmitSupportMessageCommand) -> SupportMessage:
        """
        Raises:
            DomainValidationError: If the clinic name or message is invalid
        """
        message = SupportMessage.submit(
            clinic_id=command.clinic_id,
            clinic_name=command.clinic_name,
            message=command.message,
            account_code=command.account_code,
        )
        saved = await self.message_repository.add(message)
        await self.audit.record(
            AuditAction.SUPPORT_MESSAGE_CREATED,
            f"Support message from {saved.clinic_name} ({saved.clinic_id})",
            command.actor,
        )
        return saved


class SearchSupportMessagesHandler:
    """Handler for SearchSupportMessagesQuery."""

    def __init__(self, message_repository: SupportMessageRepository):
        self.message_repository = message_repository

    async def handle(self, query: SearchSupportMessagesQuery) -> SupportInboxDTO:
        messages = await self.message_repository.search(
            status=query.status,
            clinic_id=query.clinic_id,
            text=(query.search or "").strip() or None,
            limit=INBOX_LIMIT,
        )
        return SupportInboxDTO(messages=messages, unread_count=await self.message_repository.count_unread())


class ReadSupportMessageHandler:
    """Handler for ReadSupportMessageCommand."""

    def __init__(self, message_repository: SupportMessageRepository, audit_log_repository: AuditLogRepository):
        self.message_repository = message_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: ReadSupportMessageCommand) -> SupportMessage:
        message = await _load(self.message_repository, command.message_id)
        if message.status != MessageStatus.NEW:
            return message
        read = await self.message_repository.save(message.with_status(MessageStatus.READ))
        await self.audit.record(
            AuditAction.SUPPORT_MESSAGE_UPDATED,
            f"Read support message from {message.clinic_name}",
            command.actor,
        )
        return read


class ChangeSupportMessageStatusHandler:
    """Handler for ChangeSupportMessageStatusCommand."""

    def __init__(self, message_repository: SupportMessageRepository, audit_log_repository: AuditLogRepository):
        self.message_repository = message_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: ChangeSupportMessageStatusCommand) -> SupportMessage:
        message = await _load(self.message_repository, command.message_id)
        updated = await self.message_repository.save(message.with_status(command.status))
        await self.audit.record(
            AuditAction.SUPPORT_MESSAGE_UPDATED,
            f"Changed support message status to {command.status.value} for {message.clinic_name}",
            command.actor,
        )
        return updated


class DeleteSupportMessageHandler:
    """Handler for DeleteSupportMessageCommand."""

    def __init__(self, message_repository: SupportMessageRepository, audit_log_repository: AuditLogRepository):
        self.message_repository = message_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeleteSupportMessageCommand) -> None:
        message = await _load(self.message_repository, command.message_id)
        await self.message_repository.delete(message.id)
        await self.audit.record(
            AuditAction.SUPPORT_MESSAGE_DELETED,
            f"Deleted support message from {message.clinic_name}",
            command.actor,
        )
