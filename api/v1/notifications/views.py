"""
Notification API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import IsAdmin, IsAdminOrDeveloper, IsAuthenticatedUser
from api.utils import actor_from_request
from api.v1.notifications.serializers import NotificationSerializer, SendNotificationRequestSerializer
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer
from notifications.application.commands.notification_commands import (
    ClearNotificationsCommand,
    DeleteNotificationCommand,
    SendNotificationCommand,
)
from notifications.application.handlers.notification_handlers import (
    ClearNotificationsHandler,
    DeleteNotificationHandler,
    ListNotificationsHandler,
    SendNotificationHandler,
)
from notifications.infrastructure.repositories.django_notification_repository import (
    DjangoNotificationRepository,
)

_notification_repo = DjangoNotificationRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class NotificationListView(APIView):
    """List, send and clear notifications."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticatedUser()]
        if self.request.method == "POST":
            return [IsAdminOrDeveloper()]
        return [IsAdmin()]

    @extend_schema(operation_id="list_notifications", summary="List notifications", tags=["Notifications"], responses={200: NotificationSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_notifications"):
            notifications = await ListNotificationsHandler(notification_repository=_notification_repo).handle()
            return Response(NotificationSerializer(notifications, many=True).data)

    @extend_schema(
        operation_id="send_notification",
        summary="Send notification",
        tags=["Notifications"],
        request=SendNotificationRequestSerializer,
        responses={201: NotificationSerializer, 400: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_send)(request)

    async def _handle_send(self, request: Request) -> Response:
        with tracer.start_as_current_span("send_notification") as span:
            serializer = SendNotificationRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = SendNotificationHandler(
                notification_repository=_notification_repo,
                audit_log_repository=_audit_repo,
            )
            notification = await handler.handle(
                SendNotificationCommand(
                    title=data["title"],
                    body=data["body"],
                    target_serial=data.get("targetSerial"),
                    actor=actor_from_request(request),
                )
            )
            span.set_attribute("notification.channel", notification.channel.value)
            return Response(NotificationSerializer(notification).data, status=status.HTTP_201_CREATED)

    @extend_schema(operation_id="clear_notifications", summary="Delete all notifications", tags=["Notifications"], responses={204: None})
    def delete(self, request: Request) -> Response:
        return async_to_sync(self._handle_clear)(request)

    async def _handle_clear(self, request: Request) -> Response:
        with tracer.start_as_current_span("clear_notifications") as span:
            handler = ClearNotificationsHandler(
                notification_repository=_notification_repo,
                audit_log_repository=_audit_repo,
            )
            deleted = await handler.handle(ClearNotificationsCommand(actor=actor_from_request(request)))
            span.set_attribute("notifications.deleted", deleted)
            return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationDetailView(APIView):
    """Delete one notification."""

    permission_classes = [IsAdmin]

    @extend_schema(operation_id="delete_notification", summary="Delete notification", tags=["Notifications"], responses={204: None, 404: None})
    def delete(self, request: Request, notification_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, notification_id)

    async def _handle_delete(self, request: Request, notification_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_notification"):
            handler = DeleteNotificationHandler(
                notification_repository=_notification_repo,
                audit_log_repository=_audit_repo,
            )
            await handler.handle(
                DeleteNotificationCommand(notification_id=notification_id, actor=actor_from_request(request))
            )
            return Response(status=status.HTTP_204_NO_CONTENT)
