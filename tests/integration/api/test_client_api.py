"""
Integration tests for the endpoints called by installed software.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from activations.infrastructure.models import Device as DeviceModel
from licenses.infrastructure.models import License as LicenseModel
from notifications.infrastructure.models import Notification as NotificationModel
from plans.infrastructure.models import Currency as CurrencyModel
from releases.infrastructure.models import AppVersion as AppVersionModel
from support.infrastructure.models import SupportTicket as SupportTicketModel

SERIAL = "SP-2026-AAAA-BBBB-CCCC"


def activate(client, hardware_id, serial=SERIAL, path="/license/activate"):
    return client.post(path, {"serial": serial, "hardwareId": hardware_id, "deviceName": "Till"}, format="json")


@pytest.mark.django_db
class TestActivation:
    """Tests for /license/activate and /api/pos/activate."""

    def test_activate_license(self, api_client, db_license):
        response = activate(api_client, "HW-1")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["activationDate"] is not None

        license = LicenseModel.objects.get(id=db_license.id)
        assert license.status == "active"
        assert license.hardware_id == "HW-1"
        assert license.activation_count == 1
        assert DeviceModel.objects.filter(license_id=db_license.id, is_active=True).count() == 1

    def test_device_limit(self, api_client, db_license):
        """The plan allows two devices; a third is refused but a known one reactivates."""
        assert activate(api_client, "HW-1").status_code == 200
        assert activate(api_client, "HW-2", path="/api/pos/activate").status_code == 200

        refused = activate(api_client, "HW-3")
        assert refused.status_code == 403
        assert "message" in refused.json()

        again = activate(api_client, "HW-1")
        assert again.status_code == 200
        assert DeviceModel.objects.filter(license_id=db_license.id).count() == 2

    def test_missing_hardware_id(self, api_client, db_license):
        response = api_client.post("/license/activate", {"serial": SERIAL}, format="json")

        assert response.status_code == 400

    def test_unknown_serial(self, api_client, db):
        response = activate(api_client, "HW-1", serial="SP-2026-ZZZZ-ZZZZ-ZZZZ")

        assert response.status_code == 404

    def test_paused_license_is_refused(self, api_client, db_license):
        LicenseModel.objects.filter(id=db_license.id).update(status="paused", is_paused=True)

        response = activate(api_client, "HW-1")

        assert response.status_code == 400
        assert not DeviceModel.objects.exists()

    def test_revoked_license_is_refused(self, api_client, db_license):
        LicenseModel.objects.filter(id=db_license.id).update(status="revoked")

        assert activate(api_client, "HW-1").status_code == 400


@pytest.mark.django_db
class TestValidation:
    """Tests for /license/validate."""

    def test_unknown_serial(self, api_client, db):
        response = api_client.post("/license/validate", {"serial": "SP-2026-ZZZZ-ZZZZ-ZZZZ"}, format="json")

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["status"] is None
        assert data["expireDate"] is None
        assert data["licenseId"] is None
        assert data["plan"] is None

    def test_unknown_serial_on_pos_route(self, api_client, db):
        response = api_client.post("/api/pos/validate", {"serial": "SP-2026-ZZZZ-ZZZZ-ZZZZ"}, format="json")

        assert response.status_code == 404
        assert response.json()["valid"] is False
        assert response.json()["plan"] is None

    def test_pending_license_is_not_valid(self, api_client, db_license):
        response = api_client.post("/license/validate", {"serial": SERIAL}, format="json")

        assert response.status_code == 200
        assert response.json()["valid"] is False
        assert response.json()["status"] == "pending"

    def test_valid_after_activation(self, api_client, db_license):
        api_client.post("/license/validate", {"serial": SERIAL}, format="json")
        activate(api_client, "HW-1")

        response = api_client.post("/api/pos/validate", {"serial": SERIAL}, format="json")

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["status"] == "active"
        assert data["isPaused"] is False
        assert data["daysLeft"] > 300
        assert data["plan"]["name"] == "Standard"

    def test_dashboard_pause_is_seen_immediately(self, api_client, admin_client, db_license):
        activate(api_client, "HW-1")
        api_client.post("/license/validate", {"serial": SERIAL}, format="json")

        admin_client.post(f"/api/licenses/{db_license.id}/pause")
        response = api_client.post("/license/validate", {"serial": SERIAL}, format="json")

        assert response.json()["valid"] is False
        assert response.json()["isPaused"] is True

    def test_lapsed_license_result_is_not_cached(self, api_client, db_license):
        activate(api_client, "HW-1")
        LicenseModel.objects.filter(id=db_license.id).update(expire_date=timezone.now() - timedelta(minutes=1))

        assert api_client.post("/license/validate", {"serial": SERIAL}, format="json").json()["valid"] is False

        LicenseModel.objects.filter(id=db_license.id).update(expire_date=timezone.now() + timedelta(days=30))
        assert api_client.post("/license/validate", {"serial": SERIAL}, format="json").json()["valid"] is True


@pytest.mark.django_db
class TestHeartbeat:
    """Tests for /api/pos/heartbeat."""

    def test_heartbeat(self, api_client, db_license):
        activate(api_client, "HW-1")

        response = api_client.post(
            "/api/pos/heartbeat", {"serial": SERIAL, "hardwareId": "HW-1", "appVersion": "2.1.0"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert LicenseModel.objects.get(id=db_license.id).last_check_in is not None

    def test_unknown_serial(self, api_client, db):
        response = api_client.post("/api/pos/heartbeat", {"serial": "SP-2026-ZZZZ-ZZZZ-ZZZZ"}, format="json")

        assert response.status_code == 404

    def test_missing_serial(self, api_client, db):
        response = api_client.post("/api/pos/heartbeat", {}, format="json")

        assert response.status_code == 400


@pytest.mark.django_db
class TestClientUpdatesAndConfig:
    """Tests for /app/update and /config/sync."""

    def test_no_release(self, api_client):
        response = api_client.get("/app/update", {"version": "1.0.0"})

        assert response.status_code == 200
        assert response.json()["hasUpdate"] is False

    def test_update_available(self, api_client):
        AppVersionModel.objects.create(
            version="2.0.0", download_url="https://downloads.example.com/2.0.0", force_update=True
        )

        response = api_client.get("/app/update", {"version": "1.0.0"})

        data = response.json()
        assert data["hasUpdate"] is True
        assert data["version"] == "2.0.0"
        assert data["downloadUrl"] == "https://downloads.example.com/2.0.0"
        assert data["forceUpdate"] is True

    def test_up_to_date(self, api_client):
        AppVersionModel.objects.create(
            version="2.0.0", download_url="https://downloads.example.com/2.0.0", force_update=True
        )

        data = api_client.get("/app/update", {"version": "2.0.0"}).json()

        assert data["hasUpdate"] is False
        assert data["forceUpdate"] is False

    def test_config_defaults(self, api_client):
        response = api_client.get("/config/sync")

        assert response.status_code == 200
        assert response.json() == {"maintenance_mode": False, "support_phone": "", "features": {}}

    def test_config_reflects_remote_config(self, api_client, admin_client):
        saved = admin_client.put(
            "/api/settings/remote", {"maintenance_mode": True, "min_version": "1.5.0"}, format="json"
        )
        assert saved.status_code == 200

        data = api_client.get("/config/sync").json()

        assert data["maintenance_mode"] is True
        assert data["min_version"] == "1.5.0"
        assert data["features"] == {}


@pytest.mark.django_db
class TestSupportRequest:
    """Tests for /support/request."""

    def test_ticket_linked_to_license(self, api_client, db_license):
        response = api_client.post(
            "/support/request",
            {
                "serial": SERIAL,
                "hardwareId": "HW-1",
                "appVersion": "2.1.0",
                "description": "Printer does not respond",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["ticketId"].startswith("T-")
        assert data["status"] == "open"

        ticket = SupportTicketModel.objects.get()
        assert ticket.license_id == db_license.id
        assert ticket.device_name

    def test_unknown_serial_still_accepted(self, api_client, db):
        response = api_client.post(
            "/support/request",
            {"serial": "XX-1", "hardwareId": "HW-1", "appVersion": "1.0", "description": "Help"},
            format="json",
        )

        assert response.status_code == 201
        assert SupportTicketModel.objects.get().license_id is None

    def test_description_required(self, api_client, db):
        response = api_client.post(
            "/support/request", {"serial": SERIAL, "hardwareId": "HW-1", "appVersion": "1.0"}, format="json"
        )

        assert response.status_code == 400


@pytest.mark.django_db
class TestPosFeeds:
    """Tests for /api/pos/notifications and /api/pos/plans."""

    def test_notifications_require_serial(self, api_client):
        response = api_client.get("/api/pos/notifications")

        assert response.status_code == 400

    def test_notifications_for_serial(self, api_client):
        NotificationModel.objects.create(title="Hello all", body="Broadcast")
        NotificationModel.objects.create(title="Just you", body="Direct", target_serial=SERIAL, channel="direct")
        NotificationModel.objects.create(title="Someone else", body="Direct", target_serial="OTHER", channel="direct")

        response = api_client.get("/api/pos/notifications", {"serial": SERIAL})

        assert response.status_code == 200
        assert {item["title"] for item in response.json()} == {"Hello all", "Just you"}

    def test_notifications_serial_header(self, api_client):
        NotificationModel.objects.create(title="Just you", body="Direct", target_serial=SERIAL, channel="direct")

        response = api_client.get("/api/pos/notifications", HTTP_X_SERIAL=SERIAL)

        assert [item["title"] for item in response.json()] == ["Just you"]

    def test_plan_catalog(self, api_client, db_plan):
        CurrencyModel.objects.create(code="USD", rate=Decimal("1"), symbol="$")
        CurrencyModel.objects.create(code="IQD", rate=Decimal("1310.5"), symbol="IQD")

        response = api_client.get("/api/pos/plans")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["name"] == "Standard"
        assert data[0]["deviceLimit"] == 2
        assert sorted(price["currency"] for price in data[0]["prices"]) == ["IQD", "USD"]
