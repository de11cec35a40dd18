"""
Support commands.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from audit.domain.audit_log import Actor
from support.domain.support_message import MessageStatus


@dataclass
class OpenTicketCommand:
    """Ticket opened from the back office."""

    serial: str
    hardware_id: str
    device_name: str
    system_version: str
    phone_number: str
    app_version: str
    description: str
    actor: Optional[Actor] = None


@dataclass
class SubmitDeviceTicketCommand:
    """Ticket submitted by a client installation."""

    serial: str
    hardware_id: str
    app_version: str
    description: str
    device_name: Optional[str] = None
    system_version: Optional[str] = None
    phone_number: Optional[str] = None


@dataclass
class ReplyTicketCommand:
    ticket_id: uuid.UUID
    message: str
    actor: Optional[Actor] = None


@dataclass
class ResolveTicketCommand:
    ticket_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class DeleteTicketCommand:
    ticket_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class SubmitSupportMessageCommand:
    """Message sent from inside the clinic software."""

    clinic_id: uuid.UUID
    clinic_name: str
    message: str
    account_code: Optional[str] = None
    actor: Optional[Actor] = None


@dataclass
class ReadSupportMessageCommand:
    """Open a message; NEW messages are marked READ."""

    message_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class ChangeSupportMessageStatusCommand:
    message_id: uuid.UUID
    status: MessageStatus
    actor: Optional[Actor] = None


@dataclass
class DeleteSupportMessageCommand:
    message_id: uuid.UUID
    actor: Optional[Actor] = None
