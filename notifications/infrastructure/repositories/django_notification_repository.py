"""
Django implementation of NotificationRepository port.
"""
import uuid
from typing import List

from asgiref.sync import sync_to_async
from django.db.models import Q

from core.domain.value_objects import ProductType
from notifications.domain.notification import Channel, Notification
from notifications.infrastructure.models import Notification as NotificationModel
from notifications.ports.notification_repository import NotificationRepository


class DjangoNotificationRepository(NotificationRepository):
    """Django ORM implementation of NotificationRepository."""

    def _to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            body=model.body,
            channel=Channel(model.channel),
            product_type=ProductType(model.product_type),
            sent_at=model.sent_at,
            target_serial=model.target_serial,
        )

    @sync_to_async
    def add(self, notification: Notification) -> Notification:
        model = NotificationModel.objects.create(
            id=notification.id,
            title=notification.title,
            body=notification.body,
            target_serial=notification.target_serial,
            channel=notification.channel.value,
            product_type=notification.product_type.value,
            sent_at=notification.sent_at,
        )
        return self._to_domain(model)

    @sync_to_async
    def list_all(self) -> List[Notification]:
        return [self._to_domain(model) for model in NotificationModel.objects.order_by("-sent_at")]

    @sync_to_async
    def list_for_serial(self, serial: str, product_type: ProductType, limit: int) -> List[Notification]:
        queryset = NotificationModel.objects.filter(
            Q(target_serial__isnull=True) | Q(target_serial=serial),
            product_type=product_type.value,
        ).order_by("-sent_at")[:limit]
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def delete(self, notification_id: uuid.UUID) -> bool:
        deleted, _ = NotificationModel.objects.filter(id=notification_id).delete()
        return deleted > 0

    @sync_to_async
    def clear(self) -> int:
        deleted, _ = NotificationModel.objects.all().delete()
        return deleted
