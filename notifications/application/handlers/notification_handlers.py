"""
Notification handlers.
"""
import logging
from typing import List

from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import DomainValidationError, NotificationNotFoundError
from core.domain.value_objects import ProductType
from notifications.application.commands.notification_commands import (
    ClearNotificationsCommand,
    DeleteNotificationCommand,
    SendNotificationCommand,
)
from notifications.application.queries.notification_queries import DeviceNotificationsQuery
from notifications.domain.notification import DEVICE_FEED_SIZE, Notification
from notifications.ports.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)


class ListNotificationsHandler:
    """Every notification, newest first."""

    def __init__(self, notification_repository: NotificationRepository):
        self.notification_repository = notification_repository

    async def handle(self) -> List[Notification]:
        return await self.notification_repository.list_all()


class SendNotificationHandler:
    """Handler for SendNotificationCommand."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        audit_log_repository: AuditLogRepository,
    ):
        self.notification_repository = notification_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: SendNotificationCommand) -> Notification:
        """
        Raises:
            DomainValidationError: If title or body is empty
        """
        notification = Notification.compose(
            title=command.title,
            body=command.body,
            target_serial=command.target_serial,
        )
        saved = await self.notification_repository.add(notification)
        logger.info(
            "Notification sent",
            extra={"notification_id": str(saved.id), "channel": saved.channel.value},
        )
        await self.audit.record(AuditAction.SEND_NOTIFICATION, saved.title, command.actor)
        return saved


class DeleteNotificationHandler:
    """Handler for DeleteNotificationCommand."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        audit_log_repository: AuditLogRepository,
    ):
        self.notification_repository = notification_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeleteNotificationCommand) -> None:
        if not await self.notification_repository.delete(command.notification_id):
            raise NotificationNotFoundError()
        await self.audit.record(
            AuditAction.DELETE_NOTIFICATION, str(command.notification_id), command.actor
        )


class ClearNotificationsHandler:
    """Handler for ClearNotificationsCommand."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        audit_log_repository: AuditLogRepository,
    ):
        self.notification_repository = notification_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: ClearNotificationsCommand) -> int:
        deleted = await self.notification_repository.clear()
        await self.audit.record(AuditAction.CLEAR_NOTIFICATIONS, "Cleared all notifications", command.actor)
        return deleted


class DeviceNotificationsHandler:
    """Handler for DeviceNotificationsQuery."""

    def __init__(self, notification_repository: NotificationRepository):
        self.notification_repository = notification_repository

    async def handle(self, query: DeviceNotificationsQuery) -> List[Notification]:
        """
        Latest broadcasts and direct messages for a POS serial.

        Raises:
            DomainValidationError: If no serial was given
        """
        serial = (query.serial or "").strip()
        if not serial:
            raise DomainValidationError("Serial is required")
        return await self.notification_repository.list_for_serial(
            serial, ProductType.POS, DEVICE_FEED_SIZE
        )
