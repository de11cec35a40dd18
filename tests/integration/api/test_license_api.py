"""
Integration tests for the license back-office API.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from audit.infrastructure.models import AuditLog as AuditLogModel
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import Transaction as TransactionModel


@pytest.mark.django_db
class TestLicenseAPI:
    """Tests for /api/licenses."""

    def test_list_licenses_includes_plan(self, viewer_client, db_license):
        response = viewer_client.get("/api/licenses/")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["serial"] == "SP-2026-AAAA-BBBB-CCCC"
        assert data[0]["status"] == "pending"
        assert data[0]["plan"]["name"] == "Standard"
        assert data[0]["plan"]["deviceLimit"] == 2

    def test_list_requires_authentication(self, api_client):
        response = api_client.get("/api/licenses/")

        assert response.status_code == 401

    def test_generate_licenses(self, admin_client, db_plan):
        response = admin_client.post(
            "/api/licenses/generate",
            {"planId": str(db_plan.id), "customerName": "Corner Shop", "quantity": 3},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert len(data) == 3
        assert len({item["serial"] for item in data}) == 3
        assert all(item["serial"].startswith("SP-") for item in data)
        assert all(item["status"] == "pending" for item in data)
        assert all(item["deviceLimit"] == 2 for item in data)

        purchases = TransactionModel.objects.filter(type="purchase")
        assert purchases.count() == 3
        assert all(t.amount == Decimal("120.00") and t.currency == "USD" for t in purchases)
        assert AuditLogModel.objects.filter(action="GENERATE_LICENSE").exists()

    def test_generate_unknown_plan(self, admin_client):
        response = admin_client.post(
            "/api/licenses/generate",
            {"planId": "00000000-0000-0000-0000-000000000000", "customerName": "Corner Shop"},
            format="json",
        )

        assert response.status_code == 404
        assert "message" in response.json()

    def test_generate_requires_admin(self, developer_client, db_plan):
        response = developer_client.post(
            "/api/licenses/generate",
            {"planId": str(db_plan.id), "customerName": "Corner Shop"},
            format="json",
        )

        assert response.status_code == 403

    def test_renew_license(self, admin_client, db_license):
        before = db_license.expire_date

        response = admin_client.post(f"/api/licenses/{db_license.id}/renew", {"months": 6}, format="json")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "active"
        assert datetime.fromisoformat(data["expireDate"].replace("Z", "+00:00")) > before

        renewal = TransactionModel.objects.get(type="renewal")
        assert renewal.amount == Decimal("60.00")
        assert renewal.license_id == db_license.id

    def test_renew_rejects_zero_months(self, admin_client, db_license):
        response = admin_client.post(f"/api/licenses/{db_license.id}/renew", {"months": 0}, format="json")

        assert response.status_code == 400
        assert not TransactionModel.objects.exists()

    def test_toggle_pause_twice(self, admin_client, db_license):
        url = f"/api/licenses/{db_license.id}/pause"

        paused = admin_client.post(url)
        assert paused.status_code == 200
        assert paused.json()["isPaused"] is True
        assert paused.json()["status"] == "paused"

        resumed = admin_client.post(url)
        assert resumed.status_code == 200
        assert resumed.json()["isPaused"] is False
        assert LicenseModel.objects.get(id=db_license.id).is_paused is False

    def test_revoked_license_cannot_be_paused(self, admin_client, db_license):
        revoked = admin_client.post(f"/api/licenses/{db_license.id}/revoke")
        assert revoked.status_code == 200
        assert revoked.json()["status"] == "revoked"

        response = admin_client.post(f"/api/licenses/{db_license.id}/pause")

        assert response.status_code == 400
        assert LicenseModel.objects.get(id=db_license.id).status == "revoked"

    def test_developer_can_edit(self, developer_client, db_license):
        response = developer_client.patch(
            f"/api/licenses/{db_license.id}", {"customerName": "Main Street Market"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["customerName"] == "Main Street Market"
        assert LicenseModel.objects.get(id=db_license.id).customer_name == "Main Street Market"

    def test_admin_status_reset_sets_pause_flag(self, admin_client, db_license):
        response = admin_client.patch(f"/api/licenses/{db_license.id}", {"status": "paused"}, format="json")

        assert response.status_code == 200
        assert response.json()["isPaused"] is True

    def test_developer_cannot_delete(self, developer_client, db_license):
        response = developer_client.delete(f"/api/licenses/{db_license.id}")

        assert response.status_code == 403
        assert LicenseModel.objects.filter(id=db_license.id).exists()

    def test_admin_delete(self, admin_client, db_license):
        response = admin_client.delete(f"/api/licenses/{db_license.id}")

        assert response.status_code == 204
        assert not LicenseModel.objects.filter(id=db_license.id).exists()

    def test_delete_missing_license(self, admin_client):
        response = admin_client.delete("/api/licenses/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
