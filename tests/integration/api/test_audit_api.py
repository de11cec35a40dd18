"""
Integration tests for audit and traffic logs.
"""

import pytest

from audit.infrastructure.models import AuditLog as AuditLogModel
from audit.infrastructure.models import TrafficLog as TrafficLogModel

SERIAL = "SP-2026-AAAA-BBBB-CCCC"


@pytest.mark.django_db
class TestAuditLogAPI:
    """Tests for /api/audit-logs."""

    def test_list_newest_first(self, admin_client, admin_user):
        response = admin_client.get("/api/audit-logs/")

        assert response.status_code == 200
        entries = response.json()
        assert entries[0]["action"] == "LOGIN"
        assert entries[0]["userId"] == str(admin_user.id)

    def test_filter_by_action(self, admin_client):
        admin_client.put("/api/settings/", {"theme": "dark"}, format="json")

        response = admin_client.get("/api/audit-logs/", {"action": "UPDATE_SETTINGS"})

        assert [entry["action"] for entry in response.json()] == ["UPDATE_SETTINGS"]

    def test_admin_only(self, developer_client):
        assert developer_client.get("/api/audit-logs/").status_code == 403

    def test_clear_leaves_one_entry(self, admin_client):
        admin_client.put("/api/settings/", {"theme": "dark"}, format="json")

        response = admin_client.delete("/api/audit-logs/")

        assert response.status_code == 204
        assert list(AuditLogModel.objects.values_list("action", flat=True)) == ["CLEAR_LOGS"]


@pytest.mark.django_db
class TestTrafficLogAPI:
    """Tests for /api/traffic."""

    def test_client_calls_are_captured(self, api_client, admin_client, db_license):
        api_client.post(
            "/license/activate",
            {"serial": SERIAL, "hardwareId": "HW-1", "password": "hunter2"},
            format="json",
            HTTP_USER_AGENT="POS/2.1",
        )

        entry = TrafficLogModel.objects.get(endpoint="/license/activate")
        assert entry.method == "POST"
        assert entry.status == 200
        assert entry.serial == SERIAL
        assert entry.hardware_id == "HW-1"
        assert entry.user_agent == "POS/2.1"
        assert entry.payload["password"] == "***REDACTED***"
        assert entry.response["success"] is True

    def test_dashboard_calls_are_not_captured(self, admin_client):
        admin_client.get("/api/licenses/")

        assert not TrafficLogModel.objects.exists()

    def test_search_and_pagination(self, api_client, admin_client, db_license):
        for hardware_id in ("HW-1", "HW-2", "HW-3"):
            api_client.post("/license/activate", {"serial": SERIAL, "hardwareId": hardware_id}, format="json")
        api_client.get("/app/update")

        response = admin_client.get("/api/traffic/", {"endpoint": "activate", "limit": 2})

        assert response.status_code == 200
        page = response.json()
        assert page["meta"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}
        assert len(page["data"]) == 2

        refused = admin_client.get("/api/traffic/", {"status": 403}).json()
        assert [item["hardwareId"] for item in refused["data"]] == ["HW-3"]

        by_method = admin_client.get("/api/traffic/", {"method": "get"}).json()
        assert [item["endpoint"] for item in by_method["data"]] == ["/app/update"]

    def test_get_entry(self, api_client, admin_client):
        api_client.get("/config/sync")
        entry = TrafficLogModel.objects.get()

        response = admin_client.get(f"/api/traffic/{entry.id}")

        assert response.status_code == 200
        assert response.json()["endpoint"] == "/config/sync"
        assert response.json()["response"]["maintenance_mode"] is False

    def test_get_missing_entry(self, admin_client):
        response = admin_client.get("/api/traffic/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404

    def test_clear(self, api_client, admin_client):
        api_client.get("/config/sync")

        response = admin_client.delete("/api/traffic/")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Deleted 1 traffic log entries"}
        assert not TrafficLogModel.objects.exists()
        assert AuditLogModel.objects.filter(action="TRAFFIC_LOGS_CLEARED").exists()
