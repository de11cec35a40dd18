"""
Django implementation of SupportMessageRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db.models import Q

from support.domain.support_message import MessageStatus, SupportMessage
from support.infrastructure.models import SupportMessage as MessageModel
from support.ports.support_message_repository import SupportMessageRepository


class DjangoSupportMessageRepository(SupportMessageRepository):
    """Django ORM implementation of SupportMessageRepository."""

    def _to_domain(self, model: MessageModel) -> SupportMessage:
        return SupportMessage(
            id=model.id,
            clinic_id=model.clinic_id,
            clinic_name=model.clinic_name,
            message=model.message,
            source=model.source,
            status=MessageStatus(model.status),
            created_at=model.created_at,
            account_code=model.account_code,
            read_at=model.read_at,
            closed_at=model.closed_at,
        )

    @sync_to_async
    def add(self, message: SupportMessage) -> SupportMessage:
        model = MessageModel.objects.create(
            id=message.id,
            clinic_id=message.clinic_id,
            clinic_name=message.clinic_name,
            account_code=message.account_code,
            message=message.message,
            source=message.source,
            status=message.status.value,
            created_at=message.created_at,
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, message_id: uuid.UUID) -> Optional[SupportMessage]:
        model = MessageModel.objects.filter(id=message_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def save(self, message: SupportMessage) -> SupportMessage:
        MessageModel.objects.filter(id=message.id).update(
            status=message.status.value,
            read_at=message.read_at,
            closed_at=message.closed_at,
        )
        return message

    @sync_to_async
    def delete(self, message_id: uuid.UUID) -> bool:
        deleted, _ = MessageModel.objects.filter(id=message_id).delete()
        return deleted > 0

    @sync_to_async
    def search(
        self,
        status: Optional[MessageStatus] = None,
        clinic_id: Optional[uuid.UUID] = None,
        text: Optional[str] = None,
        limit: int = 100,
    ) -> List[SupportMessage]:
        queryset = MessageModel.objects.all()
        if status:
            queryset = queryset.filter(status=status.value)
        if clinic_id:
            queryset = queryset.filter(clinic_id=clinic_id)
        if text:
            queryset = queryset.filter(
                Q(clinic_name__icontains=text) | Q(account_code__icontains=text) | Q(message__icontains=text)
            )
        return [self._to_domain(model) for model in queryset.order_by("-created_at")[:limit]]

    @sync_to_async
    def count_unread(self) -> int:
        return MessageModel.objects.filter(status=MessageStatus.NEW.value).count()
