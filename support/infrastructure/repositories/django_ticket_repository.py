"""
Django implementation of TicketRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.infrastructure.database import atomic_sync_to_async
from licenses.infrastructure.models import License as LicenseModel
from support.domain.ticket import SupportTicket, TicketReply, TicketStatus
from support.infrastructure.models import SupportTicket as TicketModel
from support.infrastructure.models import TicketReply as ReplyModel
from support.ports.ticket_repository import TicketRepository


class DjangoTicketRepository(TicketRepository):
    """Django ORM implementation of TicketRepository."""

    def _reply_to_domain(self, model: ReplyModel) -> TicketReply:
        return TicketReply(
            id=model.id,
            ticket_id=model.ticket_id,
            message=model.message,
            created_at=model.created_at,
            user_id=model.user_id,
        )

    def _to_domain(self, model: TicketModel) -> SupportTicket:
        """
        Convert Django model to domain entity.

        Replies must be prefetched by the caller.
        """
        return SupportTicket(
            id=model.id,
            serial=model.serial,
            hardware_id=model.hardware_id,
            device_name=model.device_name,
            system_version=model.system_version,
            phone_number=model.phone_number,
            app_version=model.app_version,
            description=model.description,
            status=TicketStatus(model.status),
            created_at=model.created_at,
            license_id=model.license_id,
            admin_reply=model.admin_reply,
            reply_at=model.reply_at,
            replies=tuple(self._reply_to_domain(reply) for reply in model.replies.all()),
        )

    def _queryset(self):
        return TicketModel.objects.prefetch_related("replies")

    def _write(self, ticket: SupportTicket) -> None:
        TicketModel.objects.filter(id=ticket.id).update(
            status=ticket.status.value,
            admin_reply=ticket.admin_reply,
            reply_at=ticket.reply_at,
        )

    @sync_to_async
    def add(self, ticket: SupportTicket) -> SupportTicket:
        TicketModel.objects.create(
            id=ticket.id,
            license_id=ticket.license_id,
            serial=ticket.serial,
            hardware_id=ticket.hardware_id,
            device_name=ticket.device_name,
            system_version=ticket.system_version,
            phone_number=ticket.phone_number,
            app_version=ticket.app_version,
            description=ticket.description,
            status=ticket.status.value,
            created_at=ticket.created_at,
        )
        return ticket

    @sync_to_async
    def find_by_id(self, ticket_id: uuid.UUID) -> Optional[SupportTicket]:
        model = self._queryset().filter(id=ticket_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_all(self) -> List[SupportTicket]:
        return [self._to_domain(model) for model in self._queryset().order_by("-created_at")]

    @atomic_sync_to_async
    def add_reply(self, ticket: SupportTicket, reply: TicketReply) -> SupportTicket:
        ReplyModel.objects.create(
            id=reply.id,
            ticket_id=ticket.id,
            user_id=reply.user_id,
            message=reply.message,
            created_at=reply.created_at,
        )
        self._write(ticket)
        return ticket

    @sync_to_async
    def save(self, ticket: SupportTicket) -> SupportTicket:
        self._write(ticket)
        return ticket

    @sync_to_async
    def delete(self, ticket_id: uuid.UUID) -> bool:
        deleted, _ = TicketModel.objects.filter(id=ticket_id).delete()
        return deleted > 0

    @sync_to_async
    def count_open(self) -> int:
        return TicketModel.objects.filter(status=TicketStatus.OPEN.value).count()

    @sync_to_async
    def license_id_for_serial(self, serial: str) -> Optional[uuid.UUID]:
        return LicenseModel.objects.filter(serial=serial).values_list("id", flat=True).first()
