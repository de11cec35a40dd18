"""
Support ticket domain entities.

Tickets arrive from POS installations (or are opened by staff on their
behalf) and move open -> in_progress -> resolved as staff reply.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError


class TicketStatus(Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"

    def __str__(self) -> str:
        return self.value


def _require(value: Optional[str], name: str, min_length: int = 1) -> str:
    text = (value or "").strip()
    if len(text) < min_length:
        if min_length > 1:
            raise DomainValidationError(f"{name} must be at least {min_length} characters")
        raise DomainValidationError(f"{name} is required")
    return text


@dataclass(frozen=True)
class TicketReply:
    """A staff reply on a ticket."""

    id: uuid.UUID
    ticket_id: uuid.UUID
    message: str
    created_at: datetime
    user_id: Optional[uuid.UUID] = None


@dataclass(frozen=True)
class SupportTicket:
    """
    SupportTicket domain entity.

    ``admin_reply`` and ``reply_at`` mirror the latest reply so clients
    can show it without loading the thread.
    """

    id: uuid.UUID
    serial: str
    hardware_id: str
    device_name: str
    system_version: str
    phone_number: str
    app_version: str
    description: str
    status: TicketStatus
    created_at: datetime
    license_id: Optional[uuid.UUID] = None
    admin_reply: Optional[str] = None
    reply_at: Optional[datetime] = None
    replies: Tuple[TicketReply, ...] = field(default_factory=tuple)

    @classmethod
    def open(
        cls,
        serial: str,
        hardware_id: str,
        device_name: str,
        system_version: str,
        phone_number: str,
        app_version: str,
        description: str,
    ) -> "SupportTicket":
        """
        Open a ticket from the back office; every field is required.

        Raises:
            DomainValidationError: If a field is missing or too short
        """
        return cls(
            id=uuid.uuid4(),
            serial=_require(serial, "serial", 4),
            hardware_id=_require(hardware_id, "hardwareId", 4),
            device_name=_require(device_name, "deviceName"),
            system_version=_require(system_version, "systemVersion"),
            phone_number=_require(phone_number, "phoneNumber", 4),
            app_version=_require(app_version, "appVersion"),
            description=_require(description, "description", 3),
            status=TicketStatus.OPEN,
            created_at=utcnow(),
        )

    @classmethod
    def from_device(
        cls,
        serial: str,
        hardware_id: str,
        app_version: str,
        description: str,
        device_name: Optional[str] = None,
        system_version: Optional[str] = None,
        phone_number: Optional[str] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "SupportTicket":
        """
        Ticket submitted by a client installation.

        Optional device details fall back to placeholders.

        Raises:
            DomainValidationError: If serial, hardwareId, appVersion or description is missing
        """
        return cls(
            id=uuid.uuid4(),
            serial=_require(serial, "serial"),
            hardware_id=_require(hardware_id, "hardwareId"),
            device_name=(device_name or "").strip() or "Unknown",
            system_version=(system_version or "").strip() or "Unknown",
            phone_number=(phone_number or "").strip() or "Not provided",
            app_version=_require(app_version, "appVersion"),
            description=_require(description, "description"),
            status=TicketStatus.OPEN,
            created_at=utcnow(),
            license_id=license_id,
        )

    @property
    def reference(self) -> str:
        """Short reference shown to the customer, e.g. ``T-3F2A9``."""
        return f"T-{self.id.hex[:5].upper()}"

    def reply(
        self,
        message: str,
        user_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> Tuple["SupportTicket", TicketReply]:
        """
        Add a staff reply; the ticket moves to in_progress.

        Returns:
            Updated ticket and the new reply

        Raises:
            DomainValidationError: If the message is empty
        """
        text = _require(message, "message")
        now = now or utcnow()
        entry = TicketReply(id=uuid.uuid4(), ticket_id=self.id, message=text, created_at=now, user_id=user_id)
        updated = replace(
            self,
            status=TicketStatus.IN_PROGRESS,
            admin_reply=text,
            reply_at=now,
            replies=self.replies + (entry,),
        )
        return updated, entry

    def resolve(self) -> "SupportTicket":
        return replace(self, status=TicketStatus.RESOLVED)
