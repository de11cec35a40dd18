"""
Client API views.

Endpoints polled by installed POS terminals and clinic software. None of
them require a dashboard login; the license serial is the credential.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_license import (
    ActivateLicenseCommand,
    HeartbeatCommand,
)
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.application.handlers.heartbeat_handler import HeartbeatHandler
from activations.infrastructure.repositories.django_device_repository import DjangoDeviceRepository
from api.v1.client.serializers import (
    ActivateRequestSerializer,
    ActivateResponseSerializer,
    CatalogPlanSerializer,
    HeartbeatRequestSerializer,
    HeartbeatResponseSerializer,
    SupportRequestResponseSerializer,
    SupportRequestSerializer,
    UpdateCheckSerializer,
    ValidateRequestSerializer,
    ValidationResponseSerializer,
)
from api.v1.notifications.serializers import NotificationSerializer
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from notifications.application.handlers.notification_handlers import DeviceNotificationsHandler
from notifications.application.queries.notification_queries import DeviceNotificationsQuery
from notifications.infrastructure.repositories.django_notification_repository import (
    DjangoNotificationRepository,
)
from plans.application.handlers.plan_handlers import GetPlanCatalogHandler
from plans.infrastructure.repositories.django_currency_repository import DjangoCurrencyRepository
from plans.infrastructure.repositories.django_plan_repository import DjangoPlanRepository
from releases.application.handlers.settings_handlers import SyncClientConfigHandler
from releases.application.handlers.version_handlers import CheckForUpdateHandler
from releases.infrastructure.repositories.django_app_version_repository import (
    DjangoAppVersionRepository,
)
from releases.infrastructure.repositories.django_settings_repository import DjangoSettingsRepository
from support.application.commands.support_commands import SubmitDeviceTicketCommand
from support.application.handlers.ticket_handlers import SubmitDeviceTicketHandler
from support.infrastructure.repositories.django_ticket_repository import DjangoTicketRepository

_device_repo = DjangoDeviceRepository()
_license_repo = DjangoLicenseRepository()
_plan_repo = DjangoPlanRepository()
_currency_repo = DjangoCurrencyRepository()
_notification_repo = DjangoNotificationRepository()
_version_repo = DjangoAppVersionRepository()
_settings_repo = DjangoSettingsRepository()
_ticket_repo = DjangoTicketRepository()

tracer = get_tracer(__name__)


class ClientAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]


class ActivateLicenseView(ClientAPIView):
    """Bind a device to a license."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate license",
        description="Activate a serial on a machine. Re-activating a known machine never counts against the device limit.",
        tags=["Client"],
        request=ActivateRequestSerializer,
        responses={200: ActivateResponseSerializer, 400: None, 403: None, 404: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        with tracer.start_as_current_span("activate_license") as span:
            serializer = ActivateRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            span.set_attribute("license.serial", data["serial"])
            span.set_attribute("device.hardware_id", data["hardwareId"])

            handler = ActivateLicenseHandler(device_repository=_device_repo)
            result = await handler.handle(
                ActivateLicenseCommand(
                    serial=data["serial"],
                    hardware_id=data["hardwareId"],
                    device_name=data.get("deviceName"),
                    app_version=data.get("appVersion"),
                )
            )

            span.set_attribute("activation.reactivation", result.reactivation)
            span.set_status(Status(StatusCode.OK))
            return Response(ActivateResponseSerializer(result).data)


class ValidateLicenseView(ClientAPIView):
    """Read-only validity check of a serial."""

    # Status of the null result for an unknown serial.
    unknown_serial_status = status.HTTP_200_OK

    @extend_schema(
        operation_id="validate_license",
        summary="Validate license",
        tags=["Client"],
        request=ValidateRequestSerializer,
        responses={200: ValidationResponseSerializer},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        with tracer.start_as_current_span("validate_license") as span:
            serializer = ValidateRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = ValidateLicenseHandler(license_repository=_license_repo, plan_repository=_plan_repo)
            result = await handler.handle(ValidateLicenseQuery(serial=serializer.validated_data["serial"]))

            span.set_attribute("license.found", result.found)
            span.set_attribute("license.valid", result.valid)
            body = ValidationResponseSerializer(result).data
            if not result.found:
                return Response(body, status=self.unknown_serial_status)
            return Response(body)


class PosValidateLicenseView(ValidateLicenseView):
    """POS terminals get a 404 with the same body for an unknown serial."""

    unknown_serial_status = status.HTTP_404_NOT_FOUND

    @extend_schema(
        operation_id="pos_validate_license",
        summary="Validate license (POS)",
        tags=["Client"],
        request=ValidateRequestSerializer,
        responses={200: ValidationResponseSerializer, 404: ValidationResponseSerializer},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_validate)(request)


class HeartbeatView(ClientAPIView):
    """Periodic check-in of a running POS terminal."""

    @extend_schema(
        operation_id="pos_heartbeat",
        summary="Heartbeat",
        tags=["Client"],
        request=HeartbeatRequestSerializer,
        responses={200: HeartbeatResponseSerializer, 404: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_heartbeat)(request)

    async def _handle_heartbeat(self, request: Request) -> Response:
        with tracer.start_as_current_span("pos_heartbeat"):
            serializer = HeartbeatRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            result = await HeartbeatHandler(device_repository=_device_repo).handle(
                HeartbeatCommand(
                    serial=data["serial"],
                    hardware_id=data.get("hardwareId"),
                    app_version=data.get("appVersion"),
                    device_name=data.get("deviceName"),
                )
            )
            return Response(HeartbeatResponseSerializer(result).data)


class CheckForUpdateView(ClientAPIView):
    """Compare the client's version with the newest active release."""

    @extend_schema(
        operation_id="check_for_update",
        summary="Check for update",
        tags=["Client"],
        parameters=[OpenApiParameter("version", str, required=False)],
        responses={200: UpdateCheckSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_check)(request)

    async def _handle_check(self, request: Request) -> Response:
        with tracer.start_as_current_span("check_for_update") as span:
            version = request.query_params.get("version")
            check = await CheckForUpdateHandler(version_repository=_version_repo).handle(version)
            span.set_attribute("update.available", check.has_update)
            return Response(UpdateCheckSerializer(check).data)


class ConfigSyncView(ClientAPIView):
    """Remote configuration for clients."""

    @extend_schema(operation_id="sync_config", summary="Sync client config", tags=["Client"], responses={200: dict})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_sync)(request)

    async def _handle_sync(self, request: Request) -> Response:
        with tracer.start_as_current_span("sync_config"):
            config = await SyncClientConfigHandler(settings_repository=_settings_repo).handle()
            return Response(config)


class SupportRequestView(ClientAPIView):
    """Ticket filed from a device."""

    @extend_schema(
        operation_id="submit_support_request",
        summary="Submit support request",
        tags=["Client"],
        request=SupportRequestSerializer,
        responses={201: SupportRequestResponseSerializer, 400: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_submit)(request)

    async def _handle_submit(self, request: Request) -> Response:
        with tracer.start_as_current_span("submit_support_request") as span:
            serializer = SupportRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            ticket = await SubmitDeviceTicketHandler(ticket_repository=_ticket_repo).handle(
                SubmitDeviceTicketCommand(
                    serial=data["serial"],
                    hardware_id=data["hardwareId"],
                    app_version=data["appVersion"],
                    description=data["description"],
                    device_name=data.get("deviceName"),
                    system_version=data.get("systemVersion"),
                    phone_number=data.get("phoneNumber"),
                )
            )
            span.set_attribute("ticket.reference", ticket.reference)
            return Response(SupportRequestResponseSerializer(ticket).data, status=status.HTTP_201_CREATED)


class DeviceNotificationsView(ClientAPIView):
    """Notifications a POS terminal should display."""

    @extend_schema(
        operation_id="pos_notifications",
        summary="POS notifications",
        tags=["Client"],
        parameters=[OpenApiParameter("serial", str, required=False)],
        responses={200: NotificationSerializer(many=True), 400: None},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("pos_notifications"):
            serial = request.query_params.get("serial") or request.META.get("HTTP_X_SERIAL")
            handler = DeviceNotificationsHandler(notification_repository=_notification_repo)
            notifications = await handler.handle(DeviceNotificationsQuery(serial=serial))
            return Response(NotificationSerializer(notifications, many=True).data)


class PlanCatalogView(ClientAPIView):
    """Active plans priced in every configured currency."""

    @extend_schema(
        operation_id="pos_plans",
        summary="POS plan catalog",
        tags=["Client"],
        responses={200: CatalogPlanSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_catalog)(request)

    async def _handle_catalog(self, request: Request) -> Response:
        with tracer.start_as_current_span("pos_plans"):
            handler = GetPlanCatalogHandler(plan_repository=_plan_repo, currency_repository=_currency_repo)
            catalog = await handler.handle()
            return Response(CatalogPlanSerializer(catalog, many=True).data)
