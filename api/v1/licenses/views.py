"""
License back-office API views.

Every mutation invalidates the cached validate result of the serial
(handled inside the application handlers).
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
from api.v1.licenses.serializers import (
    GenerateLicensesRequestSerializer,
    LicenseDetailSerializer,
    LicenseSerializer,
    RenewLicenseRequestSerializer,
    UpdateLicenseRequestSerializer,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.domain.value_objects import LicenseStatus
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.generate_licenses import GenerateLicensesCommand
from licenses.application.commands.license_admin_commands import (
    DeleteLicenseCommand,
    RevokeLicenseCommand,
    ToggleLicensePauseCommand,
    UpdateLicenseCommand,
)
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.handlers.generate_licenses_handler import GenerateLicensesHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    DeleteLicenseHandler,
    ListLicensesHandler,
    RenewLicenseHandler,
    RevokeLicenseHandler,
    ToggleLicensePauseHandler,
    UpdateLicenseHandler,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_transaction_repository import DjangoTransactionRepository
from plans.infrastructure.repositories.django_plan_repository import DjangoPlanRepository

_license_repo = DjangoLicenseRepository()
_plan_repo = DjangoPlanRepository()
_transaction_repo = DjangoTransactionRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class LicenseListView(APIView):
    """All licenses with their plan, newest first."""

    permission_classes = [IsAuthenticatedUser]

    @extend_schema(operation_id="list_licenses", summary="List licenses", tags=["Licenses"], responses={200: LicenseDetailSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_licenses") as span:
            handler = ListLicensesHandler(license_repository=_license_repo, plan_repository=_plan_repo)
            licenses = await handler.handle()
            span.set_attribute("licenses.count", len(licenses))
            return Response(LicenseDetailSerializer(licenses, many=True).data)


class GenerateLicensesView(APIView):
    """Issue a batch of pending POS licenses."""

    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="generate_licenses",
        summary="Generate licenses",
        description=(
            "Creates `quantity` pending licenses under the plan. A completed purchase "
            "transaction is recorded per license when the plan is not free."
        ),
        tags=["Licenses"],
        request=GenerateLicensesRequestSerializer,
        responses={201: LicenseSerializer(many=True), 400: None, 404: {"description": "Plan not found"}},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_generate)(request)

    async def _handle_generate(self, request: Request) -> Response:
        with tracer.start_as_current_span("generate_licenses") as span:
            serializer = GenerateLicensesRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("plan.id", str(data["planId"]))
            span.set_attribute("licenses.quantity", data["quantity"])

            handler = GenerateLicensesHandler(
                license_repository=_license_repo,
                plan_repository=_plan_repo,
                transaction_repository=_transaction_repo,
                audit_log_repository=_audit_repo,
            )
            licenses = await handler.handle(
                GenerateLicensesCommand(
                    plan_id=data["planId"],
                    customer_name=data["customerName"],
                    quantity=data["quantity"],
                    actor=actor_from_request(request),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(licenses, many=True).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    """Edit (admin or developer) or delete (admin) a license."""

    def get_permissions(self):
        if self.request.method == "PATCH":
            return [IsAdminOrDeveloper()]
        return [IsAdmin()]

    @extend_schema(
        operation_id="update_license",
        summary="Update license",
        description="Setting `status` is an explicit admin reset; `isPaused` follows it.",
        tags=["Licenses"],
        request=UpdateLicenseRequestSerializer,
        responses={200: LicenseSerializer, 400: None, 404: None},
    )
    def patch(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, license_id)

    async def _handle_update(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_license") as span:
            span.set_attribute("license.id", str(license_id))
            serializer = UpdateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = UpdateLicenseHandler(license_repository=_license_repo, audit_log_repository=_audit_repo)
            license = await handler.handle(
                UpdateLicenseCommand(
                    license_id=license_id,
                    customer_name=data.get("customerName"),
                    hardware_id=data.get("hardwareId"),
                    status=LicenseStatus(data["status"]) if "status" in data else None,
                    actor=actor_from_request(request),
                )
            )
            return Response(LicenseSerializer(license).data)

    @extend_schema(operation_id="delete_license", summary="Delete license", tags=["Licenses"], responses={204: None, 404: None})
    def delete(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, license_id)

    async def _handle_delete(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("license.id", str(license_id))
            handler = DeleteLicenseHandler(license_repository=_license_repo, audit_log_repository=_audit_repo)
            await handler.handle(DeleteLicenseCommand(license_id=license_id, actor=actor_from_request(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)


class RenewLicenseView(APIView):
    """Extend a license by whole months."""

    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="renew_license",
        summary="Renew license",
        tags=["Licenses"],
        request=RenewLicenseRequestSerializer,
        responses={200: LicenseSerializer, 400: None, 404: None},
    )
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_renew)(request, license_id)

    async def _handle_renew(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("renew_license") as span:
            span.set_attribute("license.id", str(license_id))
            serializer = RenewLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            months = serializer.validated_data["months"]
            span.set_attribute("renewal.months", months)

            handler = RenewLicenseHandler(
                license_repository=_license_repo,
                plan_repository=_plan_repo,
                transaction_repository=_transaction_repo,
                audit_log_repository=_audit_repo,
            )
            license = await handler.handle(
                RenewLicenseCommand(license_id=license_id, months=months, actor=actor_from_request(request))
            )
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(license).data)


class ToggleLicensePauseView(APIView):
    """Pause an active license or resume a paused one."""

    permission_classes = [IsAdmin]

    @extend_schema(operation_id="toggle_license_pause", summary="Toggle pause", tags=["Licenses"], request=None, responses={200: LicenseSerializer, 400: None, 404: None})
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_toggle)(request, license_id)

    async def _handle_toggle(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("toggle_license_pause") as span:
            span.set_attribute("license.id", str(license_id))
            handler = ToggleLicensePauseHandler(license_repository=_license_repo, audit_log_repository=_audit_repo)
            license = await handler.handle(
                ToggleLicensePauseCommand(license_id=license_id, actor=actor_from_request(request))
            )
            span.set_attribute("license.status", license.status.value)
            return Response(LicenseSerializer(license).data)


class RevokeLicenseView(APIView):
    """Revoke a license permanently."""

    permission_classes = [IsAdmin]

    @extend_schema(operation_id="revoke_license", summary="Revoke license", tags=["Licenses"], request=None, responses={200: LicenseSerializer, 404: None})
    def post(self, request: Request, license_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_revoke)(request, license_id)

    async def _handle_revoke(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("revoke_license") as span:
            span.set_attribute("license.id", str(license_id))
            handler = RevokeLicenseHandler(license_repository=_license_repo, audit_log_repository=_audit_repo)
            license = await handler.handle(RevokeLicenseCommand(license_id=license_id, actor=actor_from_request(request)))
            return Response(LicenseSerializer(license).data)
