"""
Support ticket handlers.
"""
import logging
from typing import List

from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import TicketNotFoundError
from support.application.commands.support_commands import (
    DeleteTicketCommand,
    OpenTicketCommand,
    ReplyTicketCommand,
    ResolveTicketCommand,
    SubmitDeviceTicketCommand,
)
from support.domain.ticket import SupportTicket, TicketReply
from support.ports.ticket_repository import TicketRepository

logger = logging.getLogger(__name__)


async def _load(ticket_repository: TicketRepository, ticket_id) -> SupportTicket:
    ticket = await ticket_repository.find_by_id(ticket_id)
    if ticket is None:
        raise TicketNotFoundError()
    return ticket


class ListTicketsHandler:
    """Every ticket with replies, newest first."""

    def __init__(self, ticket_repository: TicketRepository):
        self.ticket_repository = ticket_repository

    async def handle(self) -> List[SupportTicket]:
        return await self.ticket_repository.list_all()


class OpenTicketHandler:
    """Handler for OpenTicketCommand."""

    def __init__(self, ticket_repository: TicketRepository, audit_log_repository: AuditLogRepository):
        self.ticket_repository = ticket_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: OpenTicketCommand) -> SupportTicket:
        """
        Raises:
            DomainValidationError: If a field is missing or too short
        """
        ticket = SupportTicket.open(
            serial=command.serial,
            hardware_id=command.hardware_id,
            device_name=command.device_name,
            system_version=command.system_version,
            phone_number=command.phone_number,
            app_version=command.app_version,
            description=command.description,
        )
        saved = await self.ticket_repository.add(ticket)
        await self.audit.record(AuditAction.CREATE_TICKET, saved.serial, command.actor)
        return saved


class SubmitDeviceTicketHandler:
    """
    Handler for SubmitDeviceTicketCommand.

    The ticket is linked to the license when the serial exists; unknown
    serials are still accepted.
    """

    def __init__(self, ticket_repository: TicketRepository):
        self.ticket_repository = ticket_repository

    async def handle(self, command: SubmitDeviceTicketCommand) -> SupportTicket:
        license_id = None
        if command.serial:
            license_id = await self.ticket_repository.license_id_for_serial(command.serial)
        ticket = SupportTicket.from_device(
            serial=command.serial,
            hardware_id=command.hardware_id,
            app_version=command.app_version,
            description=command.description,
            device_name=command.device_name,
            system_version=command.system_version,
            phone_number=command.phone_number,
            license_id=license_id,
        )
        saved = await self.ticket_repository.add(ticket)
        logger.info(
            "Support ticket received",
            extra={"ticket": saved.reference, "serial": saved.serial, "linked": license_id is not None},
        )
        return saved


class ReplyTicketHandler:
    """Handler for ReplyTicketCommand."""

    def __init__(self, ticket_repository: TicketRepository, audit_log_repository: AuditLogRepository):
        self.ticket_repository = ticket_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: ReplyTicketCommand) -> TicketReply:
        """
        Raises:
            TicketNotFoundError: If the ticket does not exist
            DomainValidationError: If the message is empty
        """
        ticket = await _load(self.ticket_repository, command.ticket_id)
        user_id = command.actor.user_id if command.actor else None
        updated, reply = ticket.reply(command.message, user_id=user_id)
        await self.ticket_repository.add_reply(updated, reply)
        await self.audit.record(AuditAction.REPLY_TICKET, str(ticket.id), command.actor)
        return reply


class ResolveTicketHandler:
    """Handler for ResolveTicketCommand."""

    def __init__(self, ticket_repository: TicketRepository, audit_log_repository: AuditLogRepository):
        self.ticket_repository = ticket_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: ResolveTicketCommand) -> SupportTicket:
        ticket = await _load(self.ticket_repository, command.ticket_id)
        saved = await self.ticket_repository.save(ticket.resolve())
        await self.audit.record(AuditAction.RESOLVE_TICKET, str(ticket.id), command.actor)
        return saved


class DeleteTicketHandler:
    """Handler for DeleteTicketCommand."""

    def __init__(self, ticket_repository: TicketRepository, audit_log_repository: AuditLogRepository):
        self.ticket_repository = ticket_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeleteTicketCommand) -> None:
        if not await self.ticket_repository.delete(command.ticket_id):
            raise TicketNotFoundError()
        await self.audit.record(AuditAction.DELETE_TICKET, str(command.ticket_id), command.actor)
