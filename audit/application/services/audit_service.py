"""
Audit trail service.

Application handlers record every state-mutating operation through
AuditTrail so the log has one consistent writer.
"""
import logging
from typing import Optional

from audit.domain.audit_log import Actor, AuditLog
from audit.ports.audit_log_repository import AuditLogRepository

logger = logging.getLogger(__name__)


class AuditTrail:
    """Writes audit entries for an actor."""

    def __init__(self, repository: AuditLogRepository):
        """Initialize with the audit log repository."""
        self.repository = repository

    async def record(self, action: str, details: str, actor: Optional[Actor] = None) -> AuditLog:
        """
        Append an audit entry.

        Args:
            action: Action name (see AuditAction)
            details: Human readable description
            actor: Who performed the action (anonymous when omitted)

        Returns:
            The stored AuditLog entity
        """
        entry = AuditLog.create(action=action, details=details, actor=actor)
        await self.repository.add(entry)
        logger.info(
            "Audit entry recorded",
            extra={
                "audit_action": action,
                "user_id": str(entry.user_id) if entry.user_id else None,
                "ip_address": entry.ip_address,
            },
        )
        return entry
