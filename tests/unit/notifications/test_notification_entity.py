"""
Unit tests for Notification domain entity.
"""

import pytest

from core.domain.exceptions import DomainValidationError
from core.domain.value_objects import ProductType
from notifications.domain.notification import Channel, Notification


class TestNotification:
    """Tests for Notification domain entity."""

    def test_broadcast(self):
        notification = Notification.compose("Maintenance", "Servers restart at midnight")

        assert notification.channel == Channel.BROADCAST
        assert notification.target_serial is None
        assert notification.reaches("SP-2026-AAAA-BBBB-CCCC") is True

    def test_direct(self):
        notification = Notification.compose("Renewal", "Your license expires soon", target_serial=" SP-1 ")

        assert notification.channel == Channel.DIRECT
        assert notification.target_serial == "SP-1"
        assert notification.reaches("SP-1") is True
        assert notification.reaches("SP-2") is False

    def test_blank_target_is_broadcast(self):
        assert Notification.compose("Hi", "There", target_serial="  ").channel == Channel.BROADCAST

    def test_other_product_line_not_reached(self):
        notification = Notification.compose("Hi", "There")

        assert notification.reaches("SP-1", ProductType.CLINIC) is False

    @pytest.mark.parametrize("title,body", [("", "body"), ("title", "  ")])
    def test_title_and_body_required(self, title, body):
        with pytest.raises(DomainValidationError):
            Notification.compose(title, body)
