"""
Django implementation of AuditLogRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from audit.domain.audit_log import AuditLog
from audit.infrastructure.models import AuditLog as AuditLogModel
from audit.ports.audit_log_repository import AuditLogRepository


class DjangoAuditLogRepository(AuditLogRepository):
    """Django ORM implementation of AuditLogRepository."""

    def _to_domain(self, model: AuditLogModel) -> AuditLog:
        return AuditLog(
            id=model.id,
            action=model.action,
            details=model.details,
            user_id=model.user_id,
            ip_address=model.ip_address,
            created_at=model.created_at,
        )

    @sync_to_async
    def add(self, entry: AuditLog) -> AuditLog:
        AuditLogModel.objects.create(
            id=entry.id,
            action=entry.action,
            details=entry.details,
            user_id=entry.user_id,
            ip_address=entry.ip_address,
            created_at=entry.created_at,
        )
        return entry

    @sync_to_async
    def list(
        self,
        action: Optional[str] = None,
        user_id: Optional[uuid.UUID] = None,
        limit: int = 200,
    ) -> List[AuditLog]:
        queryset = AuditLogModel.objects.order_by("-created_at")
        if action:
            queryset = queryset.filter(action=action)
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        return [self._to_domain(model) for model in queryset[:limit]]

    @sync_to_async
    def clear(self) -> int:
        deleted, _ = AuditLogModel.objects.all().delete()
        return deleted
