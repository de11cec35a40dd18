"""
Integration tests for clinic onboarding, controls and subscription status.
"""

import re

import pytest
from django.utils import timezone

from accounts.infrastructure.models import Session as SessionModel
from accounts.infrastructure.models import User as UserModel
from audit.infrastructure.models import AuditLog as AuditLogModel
from clinics.infrastructure.models import Clinic as ClinicModel
from licenses.domain.serial import SerialGenerator
from licenses.infrastructure.models import License as LicenseModel

CLINIC_EMAIL = "smile@example.com"
CLINIC_PASSWORD = "clinic-pass"

REGISTRATION = {
    "name": "Smile Dental",
    "doctorName": "Dr. Rahman",
    "email": CLINIC_EMAIL,
    "password": CLINIC_PASSWORD,
    "phone": "+964 750 000 0000",
    "hwid": "HWID-12345",
    "systemVersion": "Windows 11",
}


@pytest.fixture
def registered_clinic(api_client, db):
    response = api_client.post("/api/clinics/register", REGISTRATION, format="json")
    assert response.status_code == 201, response.content
    return response.json()


@pytest.fixture
def approved_clinic(admin_client, registered_clinic, db_plan):
    response = admin_client.post(f"/api/clinics/{registered_clinic['id']}/approve", {}, format="json")
    assert response.status_code == 200, response.content
    return response.json()


@pytest.mark.django_db
class TestClinicOnboarding:
    """Tests for registration and review."""

    def test_register_clinic(self, registered_clinic):
        assert registered_clinic["status"] == "PENDING"
        assert registered_clinic["license"] is None
        assert len(registered_clinic["users"]) == 1
        user = registered_clinic["users"][0]
        assert user["role"] == "clinic_admin"
        assert user["status"] == "PENDING"
        assert user["clinicId"] == registered_clinic["id"]
        assert AuditLogModel.objects.filter(action="REGISTER_CLINIC").exists()

    def test_register_duplicate_email(self, api_client, registered_clinic):
        body = dict(REGISTRATION, hwid="HWID-99999")

        response = api_client.post("/api/clinics/register", body, format="json")

        assert response.status_code == 409

    def test_register_validation(self, api_client, db):
        response = api_client.post("/api/clinics/register", dict(REGISTRATION, hwid="abc"), format="json")

        assert response.status_code == 400
        assert not ClinicModel.objects.exists()

    def test_pending_clinic_user_cannot_sign_in(self, api_client, registered_clinic):
        response = api_client.post(
            "/api/auth/login", {"email": CLINIC_EMAIL, "password": CLINIC_PASSWORD}, format="json"
        )

        assert response.status_code == 403

    def test_list_requests(self, admin_client, registered_clinic):
        response = admin_client.get("/api/clinics/requests", {"status": "pending"})

        assert response.status_code == 200
        assert [clinic["id"] for clinic in response.json()] == [registered_clinic["id"]]

        assert admin_client.get("/api/clinics/requests", {"status": "APPROVED"}).json() == []

    def test_list_requests_unknown_status(self, admin_client, db):
        response = admin_client.get("/api/clinics/requests", {"status": "archived"})

        assert response.status_code == 400

    def test_list_requests_admin_only(self, viewer_client, db):
        assert viewer_client.get("/api/clinics/requests").status_code == 403

    def test_approve_issues_clinic_license(self, approved_clinic, db_plan, api_client, login):
        assert approved_clinic["status"] == "APPROVED"
        license = approved_clinic["license"]
        assert license["productType"] == "CLINIC"
        assert license["status"] == "active"
        assert license["planId"] == str(db_plan.id)
        assert license["customerName"] == "Smile Dental"
        assert re.match(rf"^SP-{timezone.now().year}-[A-Z2-9]{{4}}-[A-Z2-9]{{4}}-[A-Z2-9]{{4}}$", license["serial"])
        assert approved_clinic["users"][0]["status"] == "APPROVED"

        login(api_client, CLINIC_EMAIL, CLINIC_PASSWORD)
        assert api_client.get("/api/auth/me").status_code == 200

    def test_approve_retries_taken_serial(self, admin_client, registered_clinic, db_license, monkeypatch):
        serials = iter([db_license.serial, "SP-2026-FRSH-2345-6789"])
        monkeypatch.setattr(SerialGenerator, "generate", staticmethod(lambda plan, now=None: next(serials)))

        response = admin_client.post(f"/api/clinics/{registered_clinic['id']}/approve", {}, format="json")

        assert response.status_code == 200
        assert response.json()["license"]["serial"] == "SP-2026-FRSH-2345-6789"
        assert LicenseModel.objects.count() == 2

    def test_approve_twice(self, admin_client, approved_clinic):
        response = admin_client.post(f"/api/clinics/{approved_clinic['id']}/approve", {}, format="json")

        assert response.status_code == 400
        assert LicenseModel.objects.filter(product_type="CLINIC").count() == 1

    def test_approve_without_active_plan(self, admin_client, registered_clinic):
        response = admin_client.post(f"/api/clinics/{registered_clinic['id']}/approve", {}, format="json")

        assert response.status_code == 400
        assert ClinicModel.objects.get(id=registered_clinic["id"]).status == "PENDING"

    def test_approve_unknown_clinic(self, admin_client, db_plan):
        response = admin_client.post("/api/clinics/00000000-0000-0000-0000-000000000000/approve", {}, format="json")

        assert response.status_code == 404

    def test_reject(self, admin_client, registered_clinic):
        response = admin_client.post(f"/api/clinics/{registered_clinic['id']}/reject")

        assert response.status_code == 200
        assert response.json() == {"id": registered_clinic["id"], "status": "REJECTED"}
        assert UserModel.objects.get(email=CLINIC_EMAIL).status == "REJECTED"

    def test_reject_approved_clinic(self, admin_client, approved_clinic):
        response = admin_client.post(f"/api/clinics/{approved_clinic['id']}/reject")

        assert response.status_code == 400

    def test_toggle_status(self, admin_client, approved_clinic, api_client, login):
        login(api_client, CLINIC_EMAIL, CLINIC_PASSWORD)
        url = f"/api/clinics/{approved_clinic['id']}/toggle-status"

        suspended = admin_client.post(url)
        assert suspended.status_code == 200
        assert suspended.json() == {"status": "SUSPENDED"}
        license = LicenseModel.objects.get(product_type="CLINIC")
        assert license.is_paused is True
        assert license.status == "paused"
        assert not SessionModel.objects.filter(user__email=CLINIC_EMAIL).exists()
        assert api_client.get("/api/auth/me").status_code == 401

        reinstated = admin_client.post(url)
        assert reinstated.json() == {"status": "APPROVED"}
        license = LicenseModel.objects.get(product_type="CLINIC")
        assert license.is_paused is False
        assert license.status == "active"

    def test_toggle_pending_clinic(self, admin_client, registered_clinic):
        response = admin_client.post(f"/api/clinics/{registered_clinic['id']}/toggle-status")

        assert response.status_code == 400

    def test_delete_clinic(self, admin_client, approved_clinic):
        response = admin_client.delete(f"/api/clinics/{approved_clinic['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Clinic deleted successfully"}
        assert not ClinicModel.objects.exists()
        assert not LicenseModel.objects.filter(product_type="CLINIC").exists()
        assert not UserModel.objects.filter(email=CLINIC_EMAIL).exists()

    def test_delete_unknown_clinic(self, admin_client, db):
        response = admin_client.delete("/api/clinics/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404


@pytest.mark.django_db
class TestClinicControls:
    """Tests for /api/clinics/{id}/controls."""

    def test_defaults_are_public(self, api_client, registered_clinic):
        response = api_client.get(f"/api/clinics/{registered_clinic['id']}/controls")

        assert response.status_code == 200
        assert response.json() == {
            "clinicId": registered_clinic["id"],
            "storageLimitMB": 1024,
            "usersLimit": 3,
            "patientsLimit": None,
            "features": {
                "patients": True,
                "appointments": True,
                "orthodontics": False,
                "xray": False,
                "ai": False,
            },
            "locked": False,
            "lockReason": None,
        }

    def test_unknown_clinic(self, api_client, db):
        response = api_client.get("/api/clinics/00000000-0000-0000-0000-000000000000/controls")

        assert response.status_code == 404

    def test_partial_update_merges_features(self, admin_client, registered_clinic):
        url = f"/api/clinics/{registered_clinic['id']}/controls"

        response = admin_client.put(url, {"usersLimit": 5, "features": {"xray": True}}, format="json")

        assert response.status_code == 200
        data = response.json()
        assert data["usersLimit"] == 5
        assert data["storageLimitMB"] == 1024
        assert data["features"]["xray"] is True
        assert data["features"]["patients"] is True

        entry = AuditLogModel.objects.get(action="UPDATE_CLINIC_CONTROLS")
        assert "usersLimit" in entry.details

    def test_lock_requires_reason(self, admin_client, registered_clinic):
        url = f"/api/clinics/{registered_clinic['id']}/controls"

        assert admin_client.put(url, {"locked": True}, format="json").status_code == 400

        locked = admin_client.put(url, {"locked": True, "lockReason": "Unpaid invoice"}, format="json")
        assert locked.json()["locked"] is True
        assert locked.json()["lockReason"] == "Unpaid invoice"

        unlocked = admin_client.put(url, {"locked": False}, format="json")
        assert unlocked.json()["lockReason"] is None

    def test_rejects_wrong_types(self, admin_client, registered_clinic):
        url = f"/api/clinics/{registered_clinic['id']}/controls"

        assert admin_client.put(url, {"usersLimit": "5"}, format="json").status_code == 400
        assert admin_client.put(url, {"features": {"teleport": True}}, format="json").status_code == 400

    def test_update_requires_admin(self, developer_client, registered_clinic):
        response = developer_client.put(
            f"/api/clinics/{registered_clinic['id']}/controls", {"usersLimit": 5}, format="json"
        )

        assert response.status_code == 403


@pytest.mark.django_db
class TestSubscriptionStatus:
    """Tests for /api/subscription/status."""

    def test_requires_clinic(self, api_client, db):
        response = api_client.get("/api/subscription/status")

        assert response.status_code == 400

    def test_unknown_clinic(self, api_client, db):
        response = api_client.get("/subscription/status", {"clinicId": "00000000-0000-0000-0000-000000000000"})

        assert response.status_code == 404

    def test_pending_clinic_forces_logout(self, api_client, registered_clinic):
        response = api_client.get("/api/subscription/status", {"clinicId": registered_clinic["id"]})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["license"] is None
        assert data["remainingDays"] == 0
        assert data["forceLogout"] is True

    def test_approved_clinic(self, api_client, approved_clinic):
        response = api_client.get("/api/subscription/status", {"clinicId": approved_clinic["id"]})

        data = response.json()
        assert data["id"] == approved_clinic["id"]
        assert data["forceLogout"] is False
        assert data["remainingDays"] > 300
        assert data["license"]["serial"] == approved_clinic["license"]["serial"]
        assert data["license"]["plan"]["name"] == "Standard"

    def test_clinic_from_token(self, api_client, approved_clinic, login):
        login(api_client, CLINIC_EMAIL, CLINIC_PASSWORD)

        response = api_client.get("/api/subscription/status")

        assert response.status_code == 200
        assert response.json()["id"] == approved_clinic["id"]

    def test_paused_license_logs_users_out(self, api_client, approved_clinic, login):
        login(api_client, CLINIC_EMAIL, CLINIC_PASSWORD)
        LicenseModel.objects.filter(product_type="CLINIC").update(status="paused", is_paused=True)

        response = api_client.get("/api/subscription/status", {"clinicId": approved_clinic["id"]})

        assert response.json()["forceLogout"] is True
        assert not SessionModel.objects.filter(user__email=CLINIC_EMAIL).exists()
