"""
Integration tests for the notification back-office API.
"""

import pytest

from audit.infrastructure.models import AuditLog as AuditLogModel
from notifications.infrastructure.models import Notification as NotificationModel


@pytest.mark.django_db
class TestNotificationAPI:
    """Tests for /api/notifications."""

    def test_send_broadcast(self, developer_client):
        response = developer_client.post(
            "/api/notifications/", {"title": "Maintenance", "body": "Tonight at 22:00"}, format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert data["channel"] == "broadcast"
        assert data["targetSerial"] is None
        assert data["productType"] == "POS"
        assert AuditLogModel.objects.filter(action="SEND_NOTIFICATION", details="Maintenance").exists()

    def test_send_direct(self, admin_client):
        response = admin_client.post(
            "/api/notifications/",
            {"title": "Renew soon", "body": "Your license expires next week", "targetSerial": " SP-1 "},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["channel"] == "direct"
        assert response.json()["targetSerial"] == "SP-1"

    def test_blank_target_is_broadcast(self, admin_client):
        response = admin_client.post(
            "/api/notifications/", {"title": "Hello", "body": "All", "targetSerial": ""}, format="json"
        )

        assert response.json()["channel"] == "broadcast"

    def test_send_requires_title(self, admin_client):
        response = admin_client.post("/api/notifications/", {"body": "No title"}, format="json")

        assert response.status_code == 400

    def test_viewer_cannot_send(self, viewer_client):
        response = viewer_client.post("/api/notifications/", {"title": "x", "body": "y"}, format="json")

        assert response.status_code == 403

    def test_list_newest_first(self, viewer_client, admin_client):
        admin_client.post("/api/notifications/", {"title": "First", "body": "1"}, format="json")
        admin_client.post("/api/notifications/", {"title": "Second", "body": "2"}, format="json")

        response = viewer_client.get("/api/notifications/")

        assert response.status_code == 200
        assert [item["title"] for item in response.json()] == ["Second", "First"]

    def test_delete_one(self, admin_client):
        created = admin_client.post("/api/notifications/", {"title": "Gone", "body": "soon"}, format="json").json()

        response = admin_client.delete(f"/api/notifications/{created['id']}")

        assert response.status_code == 204
        assert not NotificationModel.objects.exists()
        assert admin_client.delete(f"/api/notifications/{created['id']}").status_code == 404

    def test_clear_all(self, admin_client, developer_client):
        admin_client.post("/api/notifications/", {"title": "A", "body": "1"}, format="json")
        admin_client.post("/api/notifications/", {"title": "B", "body": "2"}, format="json")

        assert developer_client.delete("/api/notifications/").status_code == 403

        response = admin_client.delete("/api/notifications/")

        assert response.status_code == 204
        assert NotificationModel.objects.count() == 0
