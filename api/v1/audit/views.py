"""
Audit log and traffic log API views (admin only).
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import IsAdmin
from api.utils import actor_from_request
from api.v1.audit.serializers import (
    AuditLogQuerySerializer,
    AuditLogSerializer,
    TrafficLogPageSerializer,
    TrafficLogQuerySerializer,
    TrafficLogSerializer,
)
from audit.application.handlers.audit_handlers import (
    ClearAuditLogsHandler,
    ClearTrafficLogsHandler,
    GetTrafficLogHandler,
    ListAuditLogsHandler,
    SearchTrafficLogsHandler,
)
from audit.application.queries.audit_queries import (
    GetTrafficLogQuery,
    ListAuditLogsQuery,
    SearchTrafficLogsQuery,
)
from audit.domain.traffic_log import TrafficLogFilter
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from audit.infrastructure.repositories.django_traffic_log_repository import (
    DjangoTrafficLogRepository,
)
from core.instrumentation import get_tracer

_audit_repo = DjangoAuditLogRepository()
_traffic_repo = DjangoTrafficLogRepository()

tracer = get_tracer(__name__)


class AuditLogListView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="list_audit_logs",
        summary="List audit logs",
        tags=["Audit"],
        parameters=[AuditLogQuerySerializer],
        responses={200: AuditLogSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_audit_logs"):
            params = AuditLogQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)
            data = params.validated_data

            entries = await ListAuditLogsHandler(audit_log_repository=_audit_repo).handle(
                ListAuditLogsQuery(
                    action=data.get("action") or None,
                    user_id=data.get("userId"),
                    limit=data["limit"],
                )
            )
            return Response(AuditLogSerializer(entries, many=True).data)

    @extend_schema(operation_id="clear_audit_logs", summary="Clear audit logs", tags=["Audit"], responses={204: None})
    def delete(self, request: Request) -> Response:
        return async_to_sync(self._handle_clear)(request)

    async def _handle_clear(self, request: Request) -> Response:
        with tracer.start_as_current_span("clear_audit_logs") as span:
            deleted = await ClearAuditLogsHandler(audit_log_repository=_audit_repo).handle(
                actor_from_request(request)
            )
            span.set_attribute("audit.deleted", deleted)
            return Response(status=status.HTTP_204_NO_CONTENT)


class TrafficLogListView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="list_traffic_logs",
        summary="Search traffic logs",
        tags=["Traffic"],
        parameters=[TrafficLogQuerySerializer],
        responses={200: TrafficLogPageSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_search)(request)

    async def _handle_search(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_traffic_logs") as span:
            params = TrafficLogQuerySerializer(data=request.query_params)
            params.is_valid(raise_exception=True)
            data = params.validated_data

            criteria = TrafficLogFilter(
                page=data["page"],
                limit=data["limit"],
                method=(data.get("method") or "").upper() or None,
                status=data.get("status"),
                endpoint=data.get("endpoint") or None,
                serial=data.get("serial") or None,
                hardware_id=data.get("hardwareId") or None,
                search=data.get("search") or None,
                start_date=data.get("startDate"),
                end_date=data.get("endDate"),
            )
            page = await SearchTrafficLogsHandler(traffic_log_repository=_traffic_repo).handle(
                SearchTrafficLogsQuery(criteria=criteria)
            )
            span.set_attribute("traffic.total", page.meta.total)
            return Response(TrafficLogPageSerializer(page).data)

    @extend_schema(operation_id="clear_traffic_logs", summary="Clear traffic logs", tags=["Traffic"], responses={200: None})
    def delete(self, request: Request) -> Response:
        return async_to_sync(self._handle_clear)(request)

    async def _handle_clear(self, request: Request) -> Response:
        with tracer.start_as_current_span("clear_traffic_logs"):
            handler = ClearTrafficLogsHandler(traffic_log_repository=_traffic_repo, audit_log_repository=_audit_repo)
            deleted = await handler.handle(actor_from_request(request))
            return Response({"success": True, "message": f"Deleted {deleted} traffic log entries"})


class TrafficLogDetailView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(operation_id="get_traffic_log", summary="Get traffic log", tags=["Traffic"], responses={200: TrafficLogSerializer, 404: None})
    def get(self, request: Request, log_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, log_id)

    async def _handle_get(self, request: Request, log_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_traffic_log"):
            entry = await GetTrafficLogHandler(traffic_log_repository=_traffic_repo).handle(
                GetTrafficLogQuery(log_id=log_id)
            )
            return Response(TrafficLogSerializer(entry).data)
