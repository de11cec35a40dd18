"""
Session-bound JWT authentication for DRF.

A token is only accepted while the session named by its ``sid`` claim
exists. Users (or clinics) that are no longer approved lose all their
sessions on their next request.
"""
import logging

from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication

from accounts.application.services.token_service import TokenService
from accounts.infrastructure.repositories.django_session_repository import DjangoSessionRepository
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from core.domain.dates import utcnow
from core.domain.exceptions import AccountInactiveError, InvalidTokenError
from core.domain.value_objects import RegistrationStatus
from core.metrics import forced_logouts_total

logger = logging.getLogger(__name__)


class SessionJWTAuthentication(JWTAuthentication):
    """JWTAuthentication that also requires a live server-side session."""

    sessions = DjangoSessionRepository()
    users = DjangoUserRepository()

    def get_user(self, validated_token):
        """
        Resolve the user behind a verified token.

        Raises:
            AuthenticationFailed: If the session was deleted or expired
            PermissionDenied: If the user or its clinic is not approved
        """
        try:
            session_id = TokenService.session_id(validated_token)
        except InvalidTokenError as e:
            raise exceptions.AuthenticationFailed(e.message) from e

        session = self.sessions.find_active_sync(session_id, utcnow())
        if session is None:
            raise exceptions.AuthenticationFailed("Session expired or revoked")

        model = super().get_user(validated_token)
        if str(model.id) != str(session.user_id):
            raise exceptions.AuthenticationFailed("Session expired or revoked")

        # pylint: disable=protected-access
        user = self.users._to_domain(model)
        clinic_status = RegistrationStatus(model.clinic.status) if model.clinic_id else None
        try:
            user.ensure_can_sign_in(clinic_status)
        except AccountInactiveError as e:
            revoked = self.sessions.delete_for_user_sync(user.id)
            forced_logouts_total.labels(reason="account_inactive").inc()
            logger.info(
                "Sessions revoked for inactive account",
                extra={"user_id": str(user.id), "count": revoked},
            )
            raise exceptions.PermissionDenied(e.message) from e

        model.session_id = session_id
        return model
