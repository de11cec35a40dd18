"""
App version and settings API views.
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
from api.v1.releases.serializers import (
    AppVersionSerializer,
    PublishVersionRequestSerializer,
    UpdateVersionRequestSerializer,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import Status, StatusCode, get_tracer
from releases.application.commands.release_commands import (
    DeleteVersionCommand,
    PublishVersionCommand,
    UpdateSettingsCommand,
    UpdateVersionCommand,
)
from releases.application.handlers.settings_handlers import (
    GetRemoteConfigHandler,
    GetSystemSettingsHandler,
    UpdateRemoteConfigHandler,
    UpdateSystemSettingsHandler,
)
from releases.application.handlers.version_handlers import (
    DeleteVersionHandler,
    LatestVersionHandler,
    ListVersionsHandler,
    PublishVersionHandler,
    UpdateVersionHandler,
)
from releases.infrastructure.repositories.django_app_version_repository import (
    DjangoAppVersionRepository,
)
from releases.infrastructure.repositories.django_settings_repository import DjangoSettingsRepository

_version_repo = DjangoAppVersionRepository()
_settings_repo = DjangoSettingsRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)

VERSION_FIELDS = {
    "version": "version",
    "downloadUrl": "download_url",
    "releaseNotes": "release_notes",
    "forceUpdate": "force_update",
    "isActive": "is_active",
}


class VersionListView(APIView):
    """List (authenticated) and publish (admin/developer) app versions."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticatedUser()]
        return [IsAdminOrDeveloper()]

    @extend_schema(operation_id="list_versions", summary="List app versions", tags=["Versions"], responses={200: AppVersionSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_versions"):
            versions = await ListVersionsHandler(version_repository=_version_repo).handle()
            return Response(AppVersionSerializer(versions, many=True).data)

    @extend_schema(
        operation_id="publish_version",
        summary="Publish app version",
        tags=["Versions"],
        request=PublishVersionRequestSerializer,
        responses={201: AppVersionSerializer, 400: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_publish)(request)

    async def _handle_publish(self, request: Request) -> Response:
        with tracer.start_as_current_span("publish_version") as span:
            serializer = PublishVersionRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = PublishVersionHandler(version_repository=_version_repo, audit_log_repository=_audit_repo)
            version = await handler.handle(
                PublishVersionCommand(
                    version=data["version"],
                    download_url=data["downloadUrl"],
                    release_notes=data["releaseNotes"],
                    force_update=data["forceUpdate"],
                    is_active=data["isActive"],
                    actor=actor_from_request(request),
                )
            )

            span.set_attribute("version", version.version)
            span.set_status(Status(StatusCode.OK))
            return Response(AppVersionSerializer(version).data, status=status.HTTP_201_CREATED)


class LatestVersionView(APIView):
    """Newest active release, or an empty object."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(operation_id="latest_version", summary="Latest app version", tags=["Versions"], responses={200: AppVersionSerializer})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_latest)(request)

    async def _handle_latest(self, request: Request) -> Response:
        with tracer.start_as_current_span("latest_version"):
            latest = await LatestVersionHandler(version_repository=_version_repo).handle()
            return Response(AppVersionSerializer(latest).data if latest else {})


class VersionDetailView(APIView):
    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAdmin()]
        return [IsAdminOrDeveloper()]

    @extend_schema(
        operation_id="update_version",
        summary="Update app version",
        tags=["Versions"],
        request=UpdateVersionRequestSerializer,
        responses={200: AppVersionSerializer, 400: None, 404: None},
    )
    def patch(self, request: Request, version_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, version_id)

    async def _handle_update(self, request: Request, version_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_version"):
            serializer = UpdateVersionRequestSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            changes = {
                attr: serializer.validated_data[key]
                for key, attr in VERSION_FIELDS.items()
                if key in serializer.validated_data
            }

            handler = UpdateVersionHandler(version_repository=_version_repo, audit_log_repository=_audit_repo)
            version = await handler.handle(
                UpdateVersionCommand(version_id=version_id, actor=actor_from_request(request), **changes)
            )
            return Response(AppVersionSerializer(version).data)

    @extend_schema(operation_id="delete_version", summary="Delete app version", tags=["Versions"], responses={204: None, 404: None})
    def delete(self, request: Request, version_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, version_id)

    async def _handle_delete(self, request: Request, version_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_version"):
            handler = DeleteVersionHandler(version_repository=_version_repo, audit_log_repository=_audit_repo)
            await handler.handle(DeleteVersionCommand(version_id=version_id, actor=actor_from_request(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)


class SystemSettingsView(APIView):
    """Key/value system settings; PUT upserts the sent keys."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticatedUser()]
        return [IsAdminOrDeveloper()]

    @extend_schema(operation_id="get_settings", summary="Get system settings", tags=["Settings"], responses={200: dict})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_get)(request)

    async def _handle_get(self, request: Request) -> Response:
        with tracer.start_as_current_span("get_settings"):
            return Response(await GetSystemSettingsHandler(settings_repository=_settings_repo).handle())

    @extend_schema(operation_id="update_settings", summary="Update system settings", tags=["Settings"], request=dict, responses={200: dict, 400: None})
    def put(self, request: Request) -> Response:
        return async_to_sync(self._handle_update)(request)

    async def _handle_update(self, request: Request) -> Response:
        with tracer.start_as_current_span("update_settings"):
            handler = UpdateSystemSettingsHandler(settings_repository=_settings_repo, audit_log_repository=_audit_repo)
            await handler.handle(UpdateSettingsCommand(entries=request.data, actor=actor_from_request(request)))
            return Response(await GetSystemSettingsHandler(settings_repository=_settings_repo).handle())


class RemoteConfigView(APIView):
    """Remote client configuration; readable without login."""

    def get_authenticators(self):
        if self.request is not None and self.request.method == "GET":
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAdminOrDeveloper()]

    @extend_schema(operation_id="get_remote_config", summary="Get remote config", tags=["Settings"], responses={200: dict})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_get)(request)

    async def _handle_get(self, request: Request) -> Response:
        with tracer.start_as_current_span("get_remote_config"):
            return Response(await GetRemoteConfigHandler(settings_repository=_settings_repo).handle())

    @extend_schema(operation_id="update_remote_config", summary="Update remote config", tags=["Settings"], request=dict, responses={200: dict, 400: None})
    def put(self, request: Request) -> Response:
        return async_to_sync(self._handle_update)(request)

    async def _handle_update(self, request: Request) -> Response:
        with tracer.start_as_current_span("update_remote_config"):
            handler = UpdateRemoteConfigHandler(settings_repository=_settings_repo, audit_log_repository=_audit_repo)
            await handler.handle(UpdateSettingsCommand(entries=request.data, actor=actor_from_request(request)))
            return Response(await GetRemoteConfigHandler(settings_repository=_settings_repo).handle())
