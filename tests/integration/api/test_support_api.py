"""
Integration tests for support tickets and clinic support messages.
"""

import uuid

import pytest

from audit.infrastructure.models import AuditLog as AuditLogModel
from support.infrastructure.models import SupportMessage as SupportMessageModel
from support.infrastructure.models import SupportTicket as SupportTicketModel

TICKET = {
    "serial": "SP-2026-AAAA-BBBB-CCCC",
    "hardwareId": "HW-0001",
    "deviceName": "Front till",
    "systemVersion": "Windows 10",
    "phoneNumber": "07501234567",
    "appVersion": "2.1.0",
    "description": "Receipt printer is offline",
}

CLINIC_ID = uuid.UUID("7b0c1d6e-8f2a-4c3b-9d5e-1a2b3c4d5e6f")


@pytest.fixture
def ticket(admin_client):
    response = admin_client.post("/api/tickets/", TICKET, format="json")
    assert response.status_code == 201, response.content
    return response.json()


def submit_message(client, message="The x-ray viewer freezes on export", **extra):
    body = {"clinicId": str(CLINIC_ID), "clinicName": "Smile Dental", "message": message}
    body.update(extra)
    return client.post("/api/support/messages", body, format="json")


@pytest.mark.django_db
class TestTicketAPI:
    """Tests for /api/tickets."""

    def test_open_ticket(self, ticket):
        assert ticket["status"] == "open"
        assert ticket["reference"].startswith("T-")
        assert ticket["replies"] == []
        assert AuditLogModel.objects.filter(action="CREATE_TICKET").exists()

    def test_open_ticket_requires_every_field(self, admin_client):
        response = admin_client.post("/api/tickets/", dict(TICKET, phoneNumber=""), format="json")

        assert response.status_code == 400
        assert not SupportTicketModel.objects.exists()

    def test_list_tickets(self, viewer_client, ticket):
        response = viewer_client.get("/api/tickets/")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [ticket["id"]]

    def test_reply_moves_to_in_progress(self, developer_client, viewer_client, ticket):
        response = developer_client.post(
            f"/api/tickets/{ticket['id']}/reply", {"message": "Please restart the printer"}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Please restart the printer"

        listed = viewer_client.get("/api/tickets/").json()[0]
        assert listed["status"] == "in_progress"
        assert listed["adminReply"] == "Please restart the printer"
        assert len(listed["replies"]) == 1

    def test_reply_requires_message(self, admin_client, ticket):
        response = admin_client.post(f"/api/tickets/{ticket['id']}/reply", {"message": ""}, format="json")

        assert response.status_code == 400

    def test_reply_unknown_ticket(self, admin_client):
        response = admin_client.post(
            "/api/tickets/00000000-0000-0000-0000-000000000000/reply", {"message": "hello"}, format="json"
        )

        assert response.status_code == 404

    def test_viewer_cannot_reply(self, viewer_client, ticket):
        response = viewer_client.post(f"/api/tickets/{ticket['id']}/reply", {"message": "hi"}, format="json")

        assert response.status_code == 403

    def test_resolve(self, developer_client, ticket):
        response = developer_client.post(f"/api/tickets/{ticket['id']}/resolve")

        assert response.status_code == 200
        assert response.json()["status"] == "resolved"

    def test_delete(self, admin_client, developer_client, ticket):
        assert developer_client.delete(f"/api/tickets/{ticket['id']}").status_code == 403
        assert admin_client.delete(f"/api/tickets/{ticket['id']}").status_code == 204
        assert admin_client.delete(f"/api/tickets/{ticket['id']}").status_code == 404


@pytest.mark.django_db
class TestSupportMessageAPI:
    """Tests for /api/support/messages."""

    def test_clinic_submits_without_login(self, api_client):
        response = submit_message(api_client, accountCode="ACC-7")

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "NEW"
        assert data["source"] == "SMART_CLINIC"
        assert data["accountCode"] == "ACC-7"
        assert AuditLogModel.objects.filter(action="SUPPORT_MESSAGE_CREATED").exists()

    def test_message_length_is_checked(self, api_client):
        response = submit_message(api_client, message="too short")

        assert response.status_code == 400
        assert not SupportMessageModel.objects.exists()

    def test_inbox_requires_admin(self, api_client, developer_client):
        assert api_client.get("/api/support/messages").status_code == 401
        assert developer_client.get("/api/support/messages").status_code == 403

    def test_inbox_filters_and_unread_count(self, api_client, admin_client):
        submit_message(api_client)
        submit_message(api_client, message="Cannot print the invoice", clinicName="Bright Teeth")

        inbox = admin_client.get("/api/support/messages").json()
        assert inbox["unreadCount"] == 2
        assert len(inbox["messages"]) == 2

        searched = admin_client.get("/api/support/messages", {"search": "bright"}).json()
        assert [m["clinicName"] for m in searched["messages"]] == ["Bright Teeth"]

        by_clinic = admin_client.get("/api/support/messages", {"clinicId": str(CLINIC_ID)}).json()
        assert len(by_clinic["messages"]) == 2

    def test_reading_marks_message_read(self, api_client, admin_client):
        created = submit_message(api_client).json()

        response = admin_client.get(f"/api/support/messages/{created['id']}")

        assert response.status_code == 200
        assert response.json()["status"] == "READ"
        assert response.json()["readAt"] is not None
        assert admin_client.get("/api/support/messages").json()["unreadCount"] == 0
        assert admin_client.get("/api/support/messages", {"status": "NEW"}).json()["messages"] == []

    def test_close_message(self, api_client, admin_client):
        created = submit_message(api_client).json()

        response = admin_client.patch(
            f"/api/support/messages/{created['id']}", {"status": "CLOSED"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["status"] == "CLOSED"
        assert response.json()["closedAt"] is not None

    def test_invalid_status(self, api_client, admin_client):
        created = submit_message(api_client).json()

        response = admin_client.patch(
            f"/api/support/messages/{created['id']}", {"status": "ARCHIVED"}, format="json"
        )

        assert response.status_code == 400

    def test_delete_message(self, api_client, admin_client):
        created = submit_message(api_client).json()

        response = admin_client.delete(f"/api/support/messages/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert admin_client.get(f"/api/support/messages/{created['id']}").status_code == 404
