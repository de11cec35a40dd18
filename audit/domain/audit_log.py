"""
Audit log domain entity.

Every state-mutating operation appends one entry. Entries are never
updated; they can only be cleared in bulk.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.domain.dates import utcnow


class AuditAction:
    """Action names written to the audit log."""

    LOGIN = "LOGIN"
    CREATE_USER = "CREATE_USER"
    DELETE_USER = "DELETE_USER"

    PLAN_CREATE = "PLAN_CREATE"
    PLAN_UPDATE = "PLAN_UPDATE"
    PLAN_DELETE = "PLAN_DELETE"
    PLAN_ACTIVATE = "PLAN_ACTIVATE"
    PLAN_DEACTIVATE = "PLAN_DEACTIVATE"

    ADD_CURRENCY = "ADD_CURRENCY"
    UPDATE_CURRENCY = "UPDATE_CURRENCY"
    DELETE_CURRENCY = "DELETE_CURRENCY"
    SYNC_RATES = "SYNC_RATES"

    GENERATE_LICENSE = "GENERATE_LICENSE"
    UPDATE_LICENSE = "UPDATE_LICENSE"
    RENEW_LICENSE = "RENEW_LICENSE"
    TOGGLE_PAUSE = "TOGGLE_PAUSE"
    REVOKE_LICENSE = "REVOKE_LICENSE"
    DELETE_LICENSE = "DELETE_LICENSE"

    REGISTER_CLINIC = "REGISTER_CLINIC"
    APPROVE_CLINIC = "APPROVE_CLINIC"
    REJECT_CLINIC = "REJECT_CLINIC"
    TOGGLE_CLINIC_STATUS = "TOGGLE_CLINIC_STATUS"
    DELETE_CLINIC = "DELETE_CLINIC"
    UPDATE_CLINIC_CONTROLS = "UPDATE_CLINIC_CONTROLS"

    SEND_NOTIFICATION = "SEND_NOTIFICATION"
    DELETE_NOTIFICATION = "DELETE_NOTIFICATION"
    CLEAR_NOTIFICATIONS = "CLEAR_NOTIFICATIONS"

    CREATE_VERSION = "CREATE_VERSION"
    UPDATE_VERSION = "UPDATE_VERSION"
    DELETE_VERSION = "DELETE_VERSION"
    UPDATE_SETTINGS = "UPDATE_SETTINGS"
    UPDATE_REMOTE_CONFIG = "UPDATE_REMOTE_CONFIG"

    CREATE_TICKET = "CREATE_TICKET"
    REPLY_TICKET = "REPLY_TICKET"
    RESOLVE_TICKET = "RESOLVE_TICKET"
    DELETE_TICKET = "DELETE_TICKET"

    SUPPORT_MESSAGE_CREATED = "SUPPORT_MESSAGE_CREATED"
    SUPPORT_MESSAGE_UPDATED = "SUPPORT_MESSAGE_UPDATED"
    SUPPORT_MESSAGE_DELETED = "SUPPORT_MESSAGE_DELETED"

    CLEAR_LOGS = "CLEAR_LOGS"
    TRAFFIC_LOGS_CLEARED = "TRAFFIC_LOGS_CLEARED"


@dataclass(frozen=True)
class Actor:
    """Who performed an audited operation (anonymous when user_id is None)."""

    user_id: Optional[uuid.UUID] = None
    ip_address: Optional[str] = None


SYSTEM_ACTOR = Actor()


@dataclass(frozen=True)
class AuditLog:
    """Audit log domain entity."""

    id: uuid.UUID
    action: str
    details: str
    user_id: Optional[uuid.UUID] = None
    ip_address: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, action: str, details: str, actor: Optional[Actor] = None) -> "AuditLog":
        """
        Create a new audit entry.

        Args:
            action: Action name (see AuditAction)
            details: Human readable description
            actor: Who performed the action

        Returns:
            AuditLog entity instance
        """
        actor = actor or SYSTEM_ACTOR
        return cls(
            id=uuid.uuid4(),
            action=action,
            details=details,
            user_id=actor.user_id,
            ip_address=actor.ip_address,
            created_at=utcnow(),
        )
