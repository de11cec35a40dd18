"""
Authentication handlers.

Login opens a server-side session for every token pair; refresh and
every authenticated request require that session to still exist.
"""
import logging
import uuid

from accounts.application.commands.auth_commands import LoginCommand, LogoutCommand, RefreshTokenCommand
from accounts.application.dto.auth_dto import LoginResultDTO, UserProfileDTO
from accounts.application.queries.user_queries import GetCurrentUserQuery
from accounts.application.services.token_service import TokenService
from accounts.domain.session import Session
from accounts.domain.user import User
from accounts.ports.session_repository import SessionRepository
from accounts.ports.user_repository import UserRepository
from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import Actor, AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.dates import utcnow
from core.domain.exceptions import (
    DomainValidationError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class LoginHandler:
    """Handler for LoginCommand."""

    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
        audit_log_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.user_repository = user_repository
        self.session_repository = session_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: LoginCommand) -> LoginResultDTO:
        """
        Authenticate a user and open a session.

        Args:
            command: LoginCommand

        Returns:
            LoginResultDTO with both tokens and the user profile

        Raises:
            DomainValidationError: If email or password is missing
            InvalidCredentialsError: If the credentials do not match
            AccountInactiveError: If the user or its clinic is not approved
        """
        if not command.email or not command.password:
            raise DomainValidationError("Email and password are required")

        user = await self.user_repository.authenticate(command.email, command.password)
        if user is None:
            logger.warning("Failed login attempt", extra={"ip_address": command.ip_address})
            raise InvalidCredentialsError()

        clinic_status = await self.user_repository.clinic_status(user)
        user.ensure_can_sign_in(clinic_status)

        session_id = uuid.uuid4()
        tokens = TokenService.issue(user, session_id)
        await self.session_repository.add(
            Session.open(
                user_id=user.id,
                refresh_jti=tokens.refresh_jti,
                expires_at=tokens.expires_at,
                user_agent=command.user_agent,
                ip_address=command.ip_address,
                session_id=session_id,
            )
        )
        await self.user_repository.record_login(user.id, command.ip_address, utcnow())
        await self.audit.record(
            AuditAction.LOGIN,
            f"User {user.email} logged in",
            Actor(user_id=user.id, ip_address=command.ip_address),
        )

        return LoginResultDTO(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            user=UserProfileDTO.from_entity(user),
        )


class RefreshTokenHandler:
    """Handler for RefreshTokenCommand."""

    def __init__(self, session_repository: SessionRepository):
        self.session_repository = session_repository

    async def handle(self, command: RefreshTokenCommand) -> str:
        """
        Issue a new access token for a live session.

        Returns:
            Encoded access token

        Raises:
            DomainValidationError: If no token was sent
            InvalidTokenError: If the token is invalid or its session is gone
        """
        if not command.refresh_token:
            raise DomainValidationError("Refresh token is required")

        refresh = TokenService.read_refresh(command.refresh_token)
        session = await self.session_repository.find_active(TokenService.session_id(refresh), utcnow())
        if session is None or session.refresh_jti != refresh.get("jti"):
            raise InvalidTokenError("Session expired or revoked")
        return str(refresh.access_token)


class LogoutHandler:
    """Handler for LogoutCommand."""

    def __init__(self, session_repository: SessionRepository):
        self.session_repository = session_repository

    async def handle(self, command: LogoutCommand) -> None:
        if command.session_id:
            await self.session_repository.delete(command.session_id)


class GetCurrentUserHandler:
    """Handler for GetCurrentUserQuery."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, query: GetCurrentUserQuery) -> User:
        user = await self.user_repository.find_by_id(query.user_id)
        if user is None:
            raise UserNotFoundError()
        return user
