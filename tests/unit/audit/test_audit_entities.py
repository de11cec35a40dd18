"""
Unit tests for audit entries, traffic filters and request sanitizing.
"""

import uuid

import pytest

from audit.domain.audit_log import SYSTEM_ACTOR, Actor, AuditAction, AuditLog
from audit.domain.traffic_log import TrafficLog, TrafficLogFilter
from core.middleware.tracing import sanitize
from core.middleware.traffic import is_client_request


class TestAuditLog:
    """Tests for AuditLog domain entity."""

    def test_create_with_actor(self):
        user_id = uuid.uuid4()

        entry = AuditLog.create(
            AuditAction.GENERATE_LICENSE,
            "Generated 2 licenses",
            Actor(user_id=user_id, ip_address="10.0.0.5"),
        )

        assert entry.action == "GENERATE_LICENSE"
        assert entry.user_id == user_id
        assert entry.ip_address == "10.0.0.5"

    def test_create_without_actor_is_system(self):
        entry = AuditLog.create(AuditAction.CLEAR_LOGS, "Audit log cleared")

        assert entry.user_id is SYSTEM_ACTOR.user_id is None
        assert entry.ip_address is None


class TestTrafficLog:
    """Tests for TrafficLog and its filter."""

    def test_create_keeps_extras(self):
        entry = TrafficLog.create("POST", "/license/activate", 200, serial="SP-1", hardware_id="HW-1")

        assert entry.serial == "SP-1"
        assert entry.hardware_id == "HW-1"
        assert entry.payload is None

    @pytest.mark.parametrize("page,limit,offset", [(1, 50, 0), (3, 20, 40)])
    def test_offset(self, page, limit, offset):
        assert TrafficLogFilter(page=page, limit=limit).offset == offset


class TestRequestCapture:
    """Tests for the client prefix check and payload sanitizing."""

    @pytest.mark.parametrize(
        "path",
        ["/license/activate", "/app/update", "/config/sync", "/support/request", "/api/pos/heartbeat", "/api/subscription/status"],
    )
    def test_client_paths(self, path):
        assert is_client_request(path)

    @pytest.mark.parametrize("path", ["/api/licenses/", "/api/support/messages", "/health/"])
    def test_dashboard_paths(self, path):
        assert not is_client_request(path)

    def test_sanitize_redacts_credentials(self):
        cleaned = sanitize(
            {"password": "hunter2", "accessToken": "abc", "nested": {"client_secret": "x", "serial": "SP-1"}, "count": 3}
        )

        assert cleaned["password"] == "***REDACTED***"
        assert cleaned["accessToken"] == "***REDACTED***"
        assert cleaned["nested"] == {"client_secret": "***REDACTED***", "serial": "SP-1"}
        assert cleaned["count"] == 3

    def test_sanitize_bounds_lists(self):
        assert len(sanitize(list(range(30)))) == 10
