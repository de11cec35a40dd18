"""
Support ticket and clinic support message API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import IsAdmin, IsAdminOrDeveloper, IsAuthenticatedUser
from api.utils import actor_from_request
from api.v1.support.serializers import (
    OpenTicketRequestSerializer,
    ReplyRequestSerializer,
    SubmitSupportMessageRequestSerializer,
    SupportInboxSerializer,
    SupportMessageQuerySerializer,
    SupportMessageSerializer,
    SupportMessageStatusSerializer,
    TicketReplySerializer,
    TicketSerializer,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer
from support.application.commands.support_commands import (
    ChangeSupportMessageStatusCommand,
    DeleteSupportMessageCommand,
    DeleteTicketCommand,
    OpenTicketCommand,
    ReadSupportMessageCommand,
    ReplyTicketCommand,
    ResolveTicketCommand,
    SubmitSupportMessageCommand,
)
from support.application.handlers.support_message_handlers import (
    ChangeSupportMessageStatusHandler,
    DeleteSupportMessageHandler,
    ReadSupportMessageHandler,
    SearchSupportMessagesHandler,
    SubmitSupportMessageHandler,
)
from support.application.handlers.ticket_handlers import (
    DeleteTicketHandler,
    ListTicketsHandler,
    OpenTicketHandler,
    ReplyTicketHandler,
    ResolveTicketHandler,
)
from support.application.queries.support_queries import SearchSupportMessagesQuery
from support.domain.support_message import MessageStatus
from support.infrastructure.repositories.django_support_message_repository import (
    DjangoSupportMessageRepository,
)
from support.infrastructure.repositories.django_ticket_repository import DjangoTicketRepository

_ticket_repo = DjangoTicketRepository()
_message_repo = DjangoSupportMessageRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class TicketListView(APIView):
    permission_classes = [IsAuthenticatedUser]

    @extend_schema(operation_id="list_tickets", summary="List support tickets", tags=["Tickets"], responses={200: TicketSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_tickets"):
            tickets = await ListTicketsHandler(ticket_repository=_ticket_repo).handle()
            return Response(TicketSerializer(tickets, many=True).data)

    @extend_schema(
        operation_id="open_ticket",
        summary="Open support ticket",
        tags=["Tickets"],
        request=OpenTicketRequestSerializer,
        responses={201: TicketSerializer, 400: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_open)(request)

    async def _handle_open(self, request: Request) -> Response:
        with tracer.start_as_current_span("open_ticket"):
            serializer = OpenTicketRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = OpenTicketHandler(ticket_repository=_ticket_repo, audit_log_repository=_audit_repo)
            ticket = await handler.handle(
                OpenTicketCommand(
                    serial=data["serial"],
                    hardware_id=data["hardwareId"],
                    device_name=data["deviceName"],
                    system_version=data["systemVersion"],
                    phone_number=data["phoneNumber"],
                    app_version=data["appVersion"],
                    description=data["description"],
                    actor=actor_from_request(request),
                )
            )
            return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class TicketReplyView(APIView):
    permission_classes = [IsAdminOrDeveloper]

    @extend_schema(
        operation_id="reply_ticket",
        summary="Reply to ticket",
        description="Adds a reply and moves the ticket to in_progress.",
        tags=["Tickets"],
        request=ReplyRequestSerializer,
        responses={201: TicketReplySerializer, 400: None, 404: None},
    )
    def post(self, request: Request, ticket_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_reply)(request, ticket_id)

    async def _handle_reply(self, request: Request, ticket_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("reply_ticket"):
            serializer = ReplyRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = ReplyTicketHandler(ticket_repository=_ticket_repo, audit_log_repository=_audit_repo)
            reply = await handler.handle(
                ReplyTicketCommand(
                    ticket_id=ticket_id,
                    message=serializer.validated_data["message"],
                    actor=actor_from_request(request),
                )
            )
            return Response(TicketReplySerializer(reply).data, status=status.HTTP_201_CREATED)


class TicketResolveView(APIView):
    permission_classes = [IsAdminOrDeveloper]

    @extend_schema(operation_id="resolve_ticket", summary="Resolve ticket", tags=["Tickets"], request=None, responses={200: TicketSerializer, 404: None})
    def post(self, request: Request, ticket_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_resolve)(request, ticket_id)

    async def _handle_resolve(self, request: Request, ticket_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("resolve_ticket"):
            handler = ResolveTicketHandler(ticket_repository=_ticket_repo, audit_log_repository=_audit_repo)
            ticket = await handler.handle(ResolveTicketCommand(ticket_id=ticket_id, actor=actor_from_request(request)))
            return Response(TicketSerializer(ticket).data)


class TicketDetailView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(operation_id="delete_ticket", summary="Delete ticket", tags=["Tickets"], responses={204: None, 404: None})
    def delete(self, request: Request, ticket_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, ticket_id)

    async def _handle_delete(self, request: Request, ticket_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_ticket"):
            handler = DeleteTicketHandler(ticket_repository=_ticket_repo, audit_log_repository=_audit_repo)
            await handler.handle(DeleteTicketCommand(ticket_id=ticket_id, actor=actor_from_request(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)


class SupportMessageListView(APIView):
    """Clinics post messages without a login; staff read the inbox."""

    def get_authenticators(self):
        if self.request is not None and self.request.method == "POST":
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAdmin()]

    @extend_schema(
        operation_id="submit_support_message",
        summary="Submit support message",
        tags=["Support"],
        request=SubmitSupportMessageRequestSerializer,
        responses={201: SupportMessageSerializer, 400: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_submit)(request)

    async def _handle_submit(self, request: Request) -> Response:
        with tracer.start_as_current_span("submit_support_message") as span:
            serializer = SubmitSupportMessageRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = SubmitSupportMessageHandler(message_repository=_message_repo, audit_log_repository=_audit_repo)
            message = await handler.handle(
                SubmitSupportMessageCommand(
                    clinic_id=data["clinicId"],
                    clinic_name=data["clinicName"],
                    message=data["message"],
                    account_code=data.get("accountCode"),
                    actor=actor_from_request(request),
                )
            )
            span.set_attribute("clinic.id", str(message.clinic_id))
            return Response(SupportMessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="list_support_messages",
        summary="Support inbox",
        tags=["Support"],
        parameters=[SupportMessageQuerySerializer],
        responses={200: SupportInboxSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_search)(request)

    async def _handle_search(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_support_messages"):
            params = SupportMessageQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)
            data = params.validated_data

            inbox = await SearchSupportMessagesHandler(message_repository=_message_repo).handle(
                SearchSupportMessagesQuery(
                    status=MessageStatus(data["status"]) if data.get("status") else None,
                    clinic_id=data.get("clinicId"),
                    search=data.get("search"),
                )
            )
            return Response(SupportInboxSerializer(inbox).data)


class SupportMessageDetailView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="get_support_message",
        summary="Read support message",
        description="Opening a NEW message marks it READ.",
        tags=["Support"],
        responses={200: SupportMessageSerializer, 404: None},
    )
    def get(self, request: Request, message_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_read)(request, message_id)

    async def _handle_read(self, request: Request, message_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_support_message"):
            handler = ReadSupportMessageHandler(message_repository=_message_repo, audit_log_repository=_audit_repo)
            message = await handler.handle(
                ReadSupportMessageCommand(message_id=message_id, actor=actor_from_request(request))
            )
            return Response(SupportMessageSerializer(message).data)

    @extend_schema(
        operation_id="update_support_message",
        summary="Change support message status",
        tags=["Support"],
        request=SupportMessageStatusSerializer,
        responses={200: SupportMessageSerializer, 400: None, 404: None},
    )
    def patch(self, request: Request, message_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_status)(request, message_id)

    async def _handle_status(self, request: Request, message_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_support_message"):
            serializer = SupportMessageStatusSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = ChangeSupportMessageStatusHandler(
                message_repository=_message_repo, audit_log_repository=_audit_repo
            )
            message = await handler.handle(
                ChangeSupportMessageStatusCommand(
                    message_id=message_id,
                    status=MessageStatus(serializer.validated_data["status"]),
                    actor=actor_from_request(request),
                )
            )
            return Response(SupportMessageSerializer(message).data)

    @extend_schema(operation_id="delete_support_message", summary="Delete support message", tags=["Support"], responses={200: None, 404: None})
    def delete(self, request: Request, message_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, message_id)

    async def _handle_delete(self, request: Request, message_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_support_message"):
            handler = DeleteSupportMessageHandler(message_repository=_message_repo, audit_log_repository=_audit_repo)
            await handler.handle(DeleteSupportMessageCommand(message_id=message_id, actor=actor_from_request(request)))
            return Response({"success": True})
