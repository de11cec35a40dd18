"""
Notification commands.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from audit.domain.audit_log import Actor


@dataclass
class SendNotificationCommand:
    """Send a broadcast, or a direct message when a serial is given."""

    title: str
    body: str
    target_serial: Optional[str] = None
    actor: Optional[Actor] = None


@dataclass
class DeleteNotificationCommand:
    """Delete one notification."""

    notification_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class ClearNotificationsCommand:
    """Delete every notification."""

    actor: Optional[Actor] = None
