"""
Authentication and user management API views.

Login and refresh are public; every other endpoint needs a bearer token
bound to a live session.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.auth_commands import (
    CreateUserCommand,
    DeleteUserCommand,
    LoginCommand,
    LogoutCommand,
    RefreshTokenCommand,
)
from accounts.application.dto.auth_dto import UserProfileDTO
from accounts.application.handlers.auth_handlers import (
    GetCurrentUserHandler,
    LoginHandler,
    LogoutHandler,
    RefreshTokenHandler,
)
from accounts.application.handlers.user_handlers import (
    CreateUserHandler,
    DeleteUserHandler,
    ListUsersHandler,
)
from accounts.application.queries.user_queries import GetCurrentUserQuery, ListUsersQuery
from accounts.infrastructure.repositories.django_session_repository import DjangoSessionRepository
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from api.permissions import IsAdmin, IsAuthenticatedUser
from api.utils import actor_from_request
from api.v1.auth.serializers import (
    CreateUserRequestSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    RefreshRequestSerializer,
    RefreshResponseSerializer,
    UserProfileSerializer,
    UserSerializer,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.domain.value_objects import Role
from core.instrumentation import Status, StatusCode, get_tracer
from core.middleware.observability import client_ip

_user_repo = DjangoUserRepository()
_session_repo = DjangoSessionRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class LoginView(APIView):
    """Exchange credentials for a session-bound token pair."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="auth_login",
        summary="Log in",
        tags=["Auth"],
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            400: {"description": "Email or password missing"},
            401: {"description": "Invalid credentials"},
            403: {"description": "Account or clinic not approved"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_login)(request)

    async def _handle_login(self, request: Request) -> Response:
        with tracer.start_as_current_span("auth_login") as span:
            serializer = LoginRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = LoginHandler(
                user_repository=_user_repo,
                session_repository=_session_repo,
                audit_log_repository=_audit_repo,
            )
            result = await handler.handle(
                LoginCommand(
                    email=serializer.validated_data["email"],
                    password=serializer.validated_data["password"],
                    user_agent=request.META.get("HTTP_USER_AGENT"),
                    ip_address=client_ip(request),
                )
            )

            span.set_attribute("user.id", str(result.user.id))
            span.set_status(Status(StatusCode.OK))
            return Response(LoginResponseSerializer(result).data)


class RefreshView(APIView):
    """Mint a new access token from a refresh token."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="auth_refresh",
        summary="Refresh access token",
        tags=["Auth"],
        request=RefreshRequestSerializer,
        responses={200: RefreshResponseSerializer, 400: None, 401: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_refresh)(request)

    async def _handle_refresh(self, request: Request) -> Response:
        with tracer.start_as_current_span("auth_refresh") as span:
            serializer = RefreshRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = RefreshTokenHandler(session_repository=_session_repo)
            access_token = await handler.handle(
                RefreshTokenCommand(refresh_token=serializer.validated_data["refreshToken"])
            )

            span.set_status(Status(StatusCode.OK))
            return Response({"accessToken": access_token})


class MeView(APIView):
    """Profile of the signed-in user."""

    permission_classes = [IsAuthenticatedUser]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user",
        tags=["Auth"],
        responses={200: UserProfileSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_me)(request)

    async def _handle_me(self, request: Request) -> Response:
        with tracer.start_as_current_span("auth_me") as span:
            handler = GetCurrentUserHandler(user_repository=_user_repo)
            user = await handler.handle(GetCurrentUserQuery(user_id=request.user.pk))
            span.set_status(Status(StatusCode.OK))
            return Response(UserProfileSerializer(UserProfileDTO.from_entity(user)).data)


class LogoutView(APIView):
    """Delete the session behind the current token."""

    permission_classes = [IsAuthenticatedUser]

    @extend_schema(operation_id="auth_logout", summary="Log out", tags=["Auth"], request=None, responses={204: None})
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_logout)(request)

    async def _handle_logout(self, request: Request) -> Response:
        with tracer.start_as_current_span("auth_logout"):
            handler = LogoutHandler(session_repository=_session_repo)
            await handler.handle(
                LogoutCommand(
                    session_id=getattr(request.user, "session_id", None),
                    actor=actor_from_request(request),
                )
            )
            return Response(status=status.HTTP_204_NO_CONTENT)


class UserListView(APIView):
    """List and create back-office users."""

    permission_classes = [IsAdmin]

    @extend_schema(operation_id="list_users", summary="List users", tags=["Users"], responses={200: UserSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_users") as span:
            users = await ListUsersHandler(user_repository=_user_repo).handle(ListUsersQuery())
            span.set_attribute("users.count", len(users))
            return Response(UserSerializer(users, many=True).data)

    @extend_schema(
        operation_id="create_user",
        summary="Create user",
        tags=["Users"],
        request=CreateUserRequestSerializer,
        responses={201: UserSerializer, 400: None, 409: {"description": "Email already in use"}},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_user") as span:
            serializer = CreateUserRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = CreateUserHandler(user_repository=_user_repo, audit_log_repository=_audit_repo)
            user = await handler.handle(
                CreateUserCommand(
                    name=data["name"],
                    email=data["email"],
                    password=data["password"],
                    role=Role(data["role"]),
                    actor=actor_from_request(request),
                )
            )

            span.set_attribute("user.id", str(user.id))
            span.set_status(Status(StatusCode.OK))
            return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class UserDetailView(APIView):
    """Delete a user."""

    permission_classes = [IsAdmin]

    @extend_schema(operation_id="delete_user", summary="Delete user", tags=["Users"], responses={204: None, 400: None, 404: None})
    def delete(self, request: Request, user_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, user_id)

    async def _handle_delete(self, request: Request, user_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_user") as span:
            span.set_attribute("user.id", str(user_id))
            handler = DeleteUserHandler(user_repository=_user_repo, audit_log_repository=_audit_repo)
            await handler.handle(DeleteUserCommand(user_id=user_id, actor=actor_from_request(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)
