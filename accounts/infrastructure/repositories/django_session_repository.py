"""
Django implementation of SessionRepository port.
"""
import uuid
from datetime import datetime
from typing import Optional

from asgiref.sync import sync_to_async

from accounts.domain.session import Session
from accounts.infrastructure.models import Session as SessionModel
from accounts.ports.session_repository import SessionRepository


class DjangoSessionRepository(SessionRepository):
    """Django ORM implementation of SessionRepository."""

    def _to_domain(self, model: SessionModel) -> Session:
        return Session(
            id=model.id,
            user_id=model.user_id,
            refresh_jti=model.refresh_jti,
            expires_at=model.expires_at,
            created_at=model.created_at,
            user_agent=model.user_agent,
            ip_address=model.ip_address,
        )

    @sync_to_async
    def add(self, session: Session) -> Session:
        model = SessionModel.objects.create(
            id=session.id,
            user_id=session.user_id,
            refresh_jti=session.refresh_jti,
            user_agent=session.user_agent,
            ip_address=session.ip_address,
            expires_at=session.expires_at,
            created_at=session.created_at,
        )
        return self._to_domain(model)

    def find_active_sync(self, session_id: uuid.UUID, now: datetime) -> Optional[Session]:
        """Synchronous lookup used by the DRF authentication class."""
        model = SessionModel.objects.filter(id=session_id, expires_at__gt=now).first()
        return self._to_domain(model) if model else None

    async def find_active(self, session_id: uuid.UUID, now: datetime) -> Optional[Session]:
        """
        Find an unexpired session.

        Args:
            session_id: Session UUID
            now: Reference time

        Returns:
            Session entity or None if missing or expired
        """
        return await sync_to_async(self.find_active_sync)(session_id, now)

    @sync_to_async
    def find_by_refresh_jti(self, refresh_jti: str) -> Optional[Session]:
        model = SessionModel.objects.filter(refresh_jti=refresh_jti).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def delete(self, session_id: uuid.UUID) -> bool:
        deleted, _ = SessionModel.objects.filter(id=session_id).delete()
        return deleted > 0

    def delete_for_user_sync(self, user_id: uuid.UUID) -> int:
        deleted, _ = SessionModel.objects.filter(user_id=user_id).delete()
        return deleted

    async def delete_for_user(self, user_id: uuid.UUID) -> int:
        """
        Delete every session of a user.

        Returns:
            Number of sessions deleted
        """
        return await sync_to_async(self.delete_for_user_sync)(user_id)

    @sync_to_async
    def delete_for_clinic(self, clinic_id: uuid.UUID) -> int:
        """
        Delete every session of every user of a clinic.

        Returns:
            Number of sessions deleted
        """
        deleted, _ = SessionModel.objects.filter(user__clinic_id=clinic_id).delete()
        return deleted
