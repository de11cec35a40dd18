"""
Clinic API views.

Registration is public; review, suspension and deletion are admin-only.
Controls can be read by anyone so clinic software can fetch its
entitlements before a user logs in.
"""

import logging
import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.services.token_service import TokenService
from accounts.infrastructure.repositories.django_session_repository import DjangoSessionRepository
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from api.permissions import IsAdmin
from api.utils import actor_from_request, bearer_token, parse_uuid
from api.v1.clinics.serializers import (
    ApproveClinicRequestSerializer,
    ClinicProfileSerializer,
    RegisterClinicRequestSerializer,
    SubscriptionStatusSerializer,
    controls_update_from,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from clinics.application.commands.clinic_commands import (
    ApproveClinicCommand,
    DeleteClinicCommand,
    RegisterClinicCommand,
    RejectClinicCommand,
    ToggleClinicStatusCommand,
    UpdateClinicControlsCommand,
)
from clinics.application.handlers.clinic_handlers import (
    ApproveClinicHandler,
    DeleteClinicHandler,
    ListClinicsHandler,
    RegisterClinicHandler,
    RejectClinicHandler,
    ToggleClinicStatusHandler,
)
from clinics.application.handlers.controls_handlers import (
    GetClinicControlsHandler,
    UpdateClinicControlsHandler,
)
from clinics.application.handlers.subscription_handler import GetSubscriptionStatusHandler
from clinics.application.queries.clinic_queries import (
    GetClinicControlsQuery,
    GetSubscriptionStatusQuery,
    ListClinicsQuery,
)
from clinics.infrastructure.repositories.django_clinic_repository import DjangoClinicRepository
from clinics.infrastructure.repositories.django_control_repository import (
    DjangoClinicControlRepository,
)
from core.domain.exceptions import DomainException, DomainValidationError
from core.domain.value_objects import RegistrationStatus
from core.instrumentation import Status, StatusCode, get_tracer
from plans.infrastructure.repositories.django_plan_repository import DjangoPlanRepository

logger = logging.getLogger(__name__)

_clinic_repo = DjangoClinicRepository()
_control_repo = DjangoClinicControlRepository()
_plan_repo = DjangoPlanRepository()
_session_repo = DjangoSessionRepository()
_user_repo = DjangoUserRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


def _controls_body(control):
    return {"clinicId": str(control.clinic_id), **control.snapshot()}


class RegisterClinicView(APIView):
    """Self-registration of a clinic."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="register_clinic",
        summary="Register clinic",
        description="Create a pending clinic together with its clinic_admin user.",
        tags=["Clinics"],
        request=RegisterClinicRequestSerializer,
        responses={201: ClinicProfileSerializer, 400: None, 409: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_register)(request)

    async def _handle_register(self, request: Request) -> Response:
        with tracer.start_as_current_span("register_clinic") as span:
            serializer = RegisterClinicRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = RegisterClinicHandler(clinic_repository=_clinic_repo, audit_log_repository=_audit_repo)
            profile = await handler.handle(
                RegisterClinicCommand(
                    name=data["name"],
                    email=data["email"],
                    password=data["password"],
                    hwid=data["hwid"],
                    doctor_name=data.get("doctorName"),
                    phone=data.get("phone"),
                    address=data.get("address"),
                    system_version=data.get("systemVersion"),
                    actor=actor_from_request(request),
                )
            )

            span.set_attribute("clinic.id", str(profile.clinic.id))
            span.set_status(Status(StatusCode.OK))
            return Response(ClinicProfileSerializer(profile).data, status=status.HTTP_201_CREATED)


class ClinicRequestListView(APIView):
    """Clinics awaiting or past review."""

    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="list_clinic_requests",
        summary="List clinics",
        tags=["Clinics"],
        parameters=[OpenApiParameter("status", str, required=False, enum=[s.value for s in RegistrationStatus])],
        responses={200: ClinicProfileSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_clinic_requests"):
            raw = request.query_params.get("status")
            try:
                status_filter = RegistrationStatus(raw.upper()) if raw else None
            except ValueError as e:
                raise DomainValidationError(f"Unknown status: {raw}") from e

            profiles = await ListClinicsHandler(clinic_repository=_clinic_repo).handle(
                ListClinicsQuery(status=status_filter)
            )
            return Response(ClinicProfileSerializer(profiles, many=True).data)


class ApproveClinicView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="approve_clinic",
        summary="Approve clinic",
        description="Approve a clinic and issue its license. Without planId the earliest-created active plan is used.",
        tags=["Clinics"],
        request=ApproveClinicRequestSerializer,
        responses={200: ClinicProfileSerializer, 400: None, 404: None},
    )
    def post(self, request: Request, clinic_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_approve)(request, clinic_id)

    async def _handle_approve(self, request: Request, clinic_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("approve_clinic") as span:
            serializer = ApproveClinicRequestSerializer(data=request.data or {})
            serializer.is_valid(raise_exception=True)

            handler = ApproveClinicHandler(
                clinic_repository=_clinic_repo,
                plan_repository=_plan_repo,
                audit_log_repository=_audit_repo,
            )
            profile = await handler.handle(
                ApproveClinicCommand(
                    clinic_id=clinic_id,
                    plan_id=serializer.validated_data.get("planId"),
                    actor=actor_from_request(request),
                )
            )

            span.set_attribute("license.serial", profile.license.serial if profile.license else "")
            span.set_status(Status(StatusCode.OK))
            return Response(ClinicProfileSerializer(profile).data)


class RejectClinicView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(operation_id="reject_clinic", summary="Reject clinic", tags=["Clinics"], request=None, responses={200: None, 400: None, 404: None})
    def post(self, request: Request, clinic_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_reject)(request, clinic_id)

    async def _handle_reject(self, request: Request, clinic_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("reject_clinic"):
            handler = RejectClinicHandler(clinic_repository=_clinic_repo, audit_log_repository=_audit_repo)
            clinic = await handler.handle(
                RejectClinicCommand(clinic_id=clinic_id, actor=actor_from_request(request))
            )
            return Response({"id": str(clinic.id), "status": clinic.status.value})


class ToggleClinicStatusView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="toggle_clinic_status",
        summary="Suspend or reinstate clinic",
        tags=["Clinics"],
        request=None,
        responses={200: None, 400: None, 404: None},
    )
    def post(self, request: Request, clinic_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_toggle)(request, clinic_id)

    async def _handle_toggle(self, request: Request, clinic_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("toggle_clinic_status") as span:
            handler = ToggleClinicStatusHandler(
                clinic_repository=_clinic_repo,
                session_repository=_session_repo,
                audit_log_repository=_audit_repo,
            )
            new_status = await handler.handle(
                ToggleClinicStatusCommand(clinic_id=clinic_id, actor=actor_from_request(request))
            )
            span.set_attribute("clinic.status", new_status.value)
            return Response({"status": new_status.value})


class ClinicDetailView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(operation_id="delete_clinic", summary="Delete clinic", tags=["Clinics"], responses={200: None, 404: None})
    def delete(self, request: Request, clinic_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, clinic_id)

    async def _handle_delete(self, request: Request, clinic_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_clinic"):
            handler = DeleteClinicHandler(clinic_repository=_clinic_repo, audit_log_repository=_audit_repo)
            await handler.handle(DeleteClinicCommand(clinic_id=clinic_id, actor=actor_from_request(request)))
            return Response({"message": "Clinic deleted successfully"})


class ClinicControlsView(APIView):
    """Quotas, feature flags and lock of a clinic."""

    def get_authenticators(self):
        if self.request is not None and self.request.method == "GET":
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAdmin()]

    @extend_schema(operation_id="get_clinic_controls", summary="Get clinic controls", tags=["Clinics"], responses={200: dict, 404: None})
    def get(self, request: Request, clinic_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_get)(request, clinic_id)

    async def _handle_get(self, request: Request, clinic_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_clinic_controls"):
            handler = GetClinicControlsHandler(clinic_repository=_clinic_repo, control_repository=_control_repo)
            control = await handler.handle(GetClinicControlsQuery(clinic_id=clinic_id))
            return Response(_controls_body(control))

    @extend_schema(
        operation_id="update_clinic_controls",
        summary="Update clinic controls",
        description="Partial update. Feature flags are merged key by key; locking requires lockReason.",
        tags=["Clinics"],
        request=dict,
        responses={200: dict, 400: None, 404: None},
    )
    def put(self, request: Request, clinic_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, clinic_id)

    async def _handle_update(self, request: Request, clinic_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_clinic_controls") as span:
            if not isinstance(request.data, dict):
                raise DomainValidationError("Request body must be a JSON object")

            handler = UpdateClinicControlsHandler(
                clinic_repository=_clinic_repo,
                control_repository=_control_repo,
                audit_log_repository=_audit_repo,
            )
            control = await handler.handle(
                UpdateClinicControlsCommand(
                    clinic_id=clinic_id,
                    update=controls_update_from(request.data),
                    actor=actor_from_request(request),
                )
            )
            span.set_attribute("clinic.locked", control.locked)
            return Response(_controls_body(control))


class SubscriptionStatusView(APIView):
    """
    Access state polled by clinic software.

    The clinic is named by ``clinicId`` or derived from a Bearer token.
    A bad token is not an error here; the request then simply lacks a
    clinic.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="subscription_status",
        summary="Subscription status",
        tags=["Client"],
        parameters=[OpenApiParameter("clinicId", str, required=False)],
        responses={200: SubscriptionStatusSerializer, 400: None, 404: None},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_status)(request)

    async def _clinic_from_token(self, request: Request):
        raw = bearer_token(request)
        if not raw:
            return None
        try:
            token = TokenService.read_access(raw)
            user = await _user_repo.find_by_id(TokenService.user_id(token))
        except DomainException as e:
            logger.info("Ignoring unusable token on status poll", extra={"reason": e.message})
            return None
        return user.clinic_id if user else None

    async def _handle_status(self, request: Request) -> Response:
        with tracer.start_as_current_span("subscription_status") as span:
            raw_id = request.query_params.get("clinicId")
            clinic_id = parse_uuid(raw_id, "clinicId") if raw_id else await self._clinic_from_token(request)
            if clinic_id is None:
                raise DomainValidationError("Clinic ID or valid Auth Token is required")

            handler = GetSubscriptionStatusHandler(
                clinic_repository=_clinic_repo,
                plan_repository=_plan_repo,
                session_repository=_session_repo,
            )
            result = await handler.handle(GetSubscriptionStatusQuery(clinic_id=clinic_id))

            span.set_attribute("clinic.force_logout", result.force_logout)
            return Response(SubscriptionStatusSerializer(result).data)
