"""
SupportMessage domain entity.

Messages sent from inside the clinic software to the back office.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError

MIN_MESSAGE_LENGTH = 10
MAX_MESSAGE_LENGTH = 5000
CLINIC_SOURCE = "SMART_CLINIC"


class MessageStatus(Enum):
    NEW = "NEW"
    READ = "READ"
    CLOSED = "CLOSED"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SupportMessage:
    """A message from a clinic."""

    id: uuid.UUID
    clinic_id: uuid.UUID
    clinic_name: str
    message: str
    source: str
    status: MessageStatus
    created_at: datetime
    account_code: Optional[str] = None
    read_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    @classmethod
    def submit(
        cls,
        clinic_id: uuid.UUID,
        clinic_name: str,
        message: str,
        account_code: Optional[str] = None,
    ) -> "SupportMessage":
        """
        Create a NEW message.

        Raises:
            DomainValidationError: If the clinic name is empty or the message length is out of range
        """
        if not clinic_name or not clinic_name.strip():
            raise DomainValidationError("clinicName is required")
        text = (message or "").strip()
        if not MIN_MESSAGE_LENGTH <= len(text) <= MAX_MESSAGE_LENGTH:
            raise DomainValidationError(
                f"message must be between {MIN_MESSAGE_LENGTH} and {MAX_MESSAGE_LENGTH} characters"
            )
        return cls(
            id=uuid.uuid4(),
            clinic_id=clinic_id,
            clinic_name=clinic_name.strip(),
            message=text,
            source=CLINIC_SOURCE,
            status=MessageStatus.NEW,
            created_at=utcnow(),
            account_code=account_code or None,
        )

    def with_status(self, status: MessageStatus, now: Optional[datetime] = None) -> "SupportMessage":
        """
        Move to a new status.

        ``read_at`` and ``closed_at`` are stamped the first time the
        message reaches READ or CLOSED and never overwritten.
        """
        now = now or utcnow()
        changes = {"status": status}
        if status == MessageStatus.READ and self.read_at is None:
            changes["read_at"] = now
        if status == MessageStatus.CLOSED and self.closed_at is None:
            changes["closed_at"] = now
        return replace(self, **changes)
