"""
Unit tests for support tickets and clinic support messages.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from core.domain.exceptions import DomainValidationError
from support.domain.support_message import CLINIC_SOURCE, MessageStatus, SupportMessage
from support.domain.ticket import SupportTicket, TicketStatus


def device_ticket(**overrides):
    values = {
        "serial": "SP-2026-AAAA-BBBB-CCCC",
        "hardware_id": "HW-1",
        "app_version": "2.1.0",
        "description": "Printer does not respond",
    }
    values.update(overrides)
    return SupportTicket.from_device(**values)


class TestSupportTicket:
    """Tests for SupportTicket domain entity."""

    def test_open_requires_every_field(self):
        with pytest.raises(DomainValidationError) as exc:
            SupportTicket.open(
                serial="SP-1",
                hardware_id="HW-12",
                device_name="Till 1",
                system_version="Windows 11",
                phone_number="0770",
                app_version="2.1.0",
                description="ok",
            )

        assert "description" in exc.value.message

    def test_open_ticket(self):
        ticket = SupportTicket.open(
            serial="SP-2026-AAAA",
            hardware_id="HW-1234",
            device_name="Till 1",
            system_version="Windows 11",
            phone_number="07701234567",
            app_version="2.1.0",
            description="Receipts print blank",
        )

        assert ticket.status == TicketStatus.OPEN
        assert ticket.replies == ()

    def test_from_device_fills_placeholders(self):
        ticket = device_ticket()

        assert ticket.device_name == "Unknown"
        assert ticket.system_version == "Unknown"
        assert ticket.phone_number == "Not provided"

    def test_from_device_requires_description(self):
        with pytest.raises(DomainValidationError):
            device_ticket(description="  ")

    def test_reference(self):
        ticket = replace(device_ticket(), id=uuid.UUID("3f2a9c00-0000-4000-8000-000000000000"))

        assert ticket.reference == "T-3F2A9"

    def test_reply_moves_ticket_in_progress(self):
        now = datetime(2026, 4, 1, tzinfo=timezone.utc)
        staff = uuid.uuid4()

        ticket, reply = device_ticket().reply("Please restart the printer", user_id=staff, now=now)

        assert ticket.status == TicketStatus.IN_PROGRESS
        assert ticket.admin_reply == "Please restart the printer"
        assert ticket.reply_at == now
        assert ticket.replies == (reply,)
        assert reply.user_id == staff

    def test_reply_requires_message(self):
        with pytest.raises(DomainValidationError):
            device_ticket().reply("")

    def test_resolve(self):
        assert device_ticket().resolve().status == TicketStatus.RESOLVED


class TestSupportMessage:
    """Tests for SupportMessage domain entity."""

    def test_submit(self):
        message = SupportMessage.submit(uuid.uuid4(), " Smile Clinic ", "  The x-ray viewer is slow  ")

        assert message.status == MessageStatus.NEW
        assert message.source == CLINIC_SOURCE
        assert message.clinic_name == "Smile Clinic"
        assert message.message == "The x-ray viewer is slow"

    def test_message_too_short(self):
        with pytest.raises(DomainValidationError):
            SupportMessage.submit(uuid.uuid4(), "Smile Clinic", "help")

    def test_clinic_name_required(self):
        with pytest.raises(DomainValidationError):
            SupportMessage.submit(uuid.uuid4(), "", "The x-ray viewer is slow")

    def test_read_and_closed_stamped_once(self):
        first = datetime(2026, 4, 1, tzinfo=timezone.utc)
        later = datetime(2026, 4, 2, tzinfo=timezone.utc)
        message = SupportMessage.submit(uuid.uuid4(), "Smile Clinic", "The x-ray viewer is slow")

        read = message.with_status(MessageStatus.READ, now=first)
        reread = read.with_status(MessageStatus.READ, now=later)
        closed = reread.with_status(MessageStatus.CLOSED, now=later)

        assert reread.read_at == first
        assert closed.closed_at == later
        assert closed.read_at == first
