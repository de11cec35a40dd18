"""
JWT token service.

Wraps djangorestframework-simplejwt. Every token carries a ``sid``
claim naming the server-side Session it belongs to, so deleting the
session invalidates both tokens immediately.
"""
import uuid
from datetime import datetime, timezone

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from accounts.application.dto.auth_dto import TokenPair
from accounts.domain.user import User
from core.domain.exceptions import InvalidTokenError

SESSION_CLAIM = "sid"


class TokenService:
    """Issues and verifies access and refresh tokens."""

    @staticmethod
    def issue(user: User, session_id: uuid.UUID) -> TokenPair:
        """
        Mint a token pair bound to a session.

        Args:
            user: Authenticated user
            session_id: Id of the session the tokens belong to

        Returns:
            TokenPair with the refresh token id and expiry for the session row
        """
        refresh = RefreshToken.for_user(user)
        refresh[SESSION_CLAIM] = str(session_id)
        access = refresh.access_token
        return TokenPair(
            access_token=str(access),
            refresh_token=str(refresh),
            refresh_jti=refresh[api_settings.JTI_CLAIM],
            expires_at=datetime.fromtimestamp(refresh["exp"], tz=timezone.utc),
        )

    @staticmethod
    def read_refresh(raw: str) -> RefreshToken:
        """
        Verify a refresh token.

        Raises:
            InvalidTokenError: If the token is malformed, tampered or expired
        """
        try:
            return RefreshToken(raw)
        except TokenError as e:
            raise InvalidTokenError() from e

    @staticmethod
    def read_access(raw: str) -> AccessToken:
        """
        Verify an access token.

        Raises:
            InvalidTokenError: If the token is malformed, tampered or expired
        """
        try:
            return AccessToken(raw)
        except TokenError as e:
            raise InvalidTokenError("Invalid access token") from e

    @staticmethod
    def session_id(token) -> uuid.UUID:
        """
        Session id carried by a verified token.

        Raises:
            InvalidTokenError: If the claim is missing or malformed
        """
        try:
            return uuid.UUID(str(token[SESSION_CLAIM]))
        except (KeyError, ValueError) as e:
            raise InvalidTokenError("Token is not bound to a session") from e

    @staticmethod
    def user_id(token) -> uuid.UUID:
        try:
            return uuid.UUID(str(token[api_settings.USER_ID_CLAIM]))
        except (KeyError, ValueError) as e:
            raise InvalidTokenError("Token has no user") from e
