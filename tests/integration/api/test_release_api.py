"""
Integration tests for app versions, system settings and remote config.
"""

import pytest

from audit.infrastructure.models import AuditLog as AuditLogModel
from releases.infrastructure.models import AppVersion as AppVersionModel


def publish(client, version, **extra):
    body = {"version": version, "downloadUrl": f"https://downloads.example.com/{version}"}
    body.update(extra)
    return client.post("/api/versions/", body, format="json")


@pytest.mark.django_db
class TestVersionAPI:
    """Tests for /api/versions."""

    def test_publish_version(self, developer_client):
        response = publish(developer_client, "2.0.0", releaseNotes="Faster receipts", forceUpdate=True)

        assert response.status_code == 201
        data = response.json()
        assert data["version"] == "2.0.0"
        assert data["forceUpdate"] is True
        assert data["isActive"] is True
        assert AuditLogModel.objects.filter(action="CREATE_VERSION", details="2.0.0").exists()

    def test_publish_rejects_bad_url(self, admin_client):
        response = admin_client.post(
            "/api/versions/", {"version": "2.0.0", "downloadUrl": "ftp://example.com/x"}, format="json"
        )

        assert response.status_code == 400
        assert not AppVersionModel.objects.exists()

    def test_viewer_can_list_but_not_publish(self, viewer_client, admin_client):
        publish(admin_client, "1.0.0")

        assert viewer_client.get("/api/versions/").status_code == 200
        assert len(viewer_client.get("/api/versions/").json()) == 1
        assert publish(viewer_client, "1.1.0").status_code == 403

    def test_latest_is_public(self, api_client, admin_client):
        publish(admin_client, "1.0.0")
        publish(admin_client, "1.1.0")
        publish(admin_client, "2.0.0-beta", isActive=False)

        response = api_client.get("/api/versions/latest")

        assert response.status_code == 200
        assert response.json()["version"] == "1.1.0"

    def test_latest_without_versions(self, api_client, db):
        assert api_client.get("/api/versions/latest").json() == {}

    def test_update_version(self, developer_client):
        created = publish(developer_client, "1.0.0").json()

        response = developer_client.patch(f"/api/versions/{created['id']}", {"isActive": False}, format="json")

        assert response.status_code == 200
        assert response.json()["isActive"] is False
        assert response.json()["version"] == "1.0.0"

    def test_update_missing_version(self, admin_client):
        response = admin_client.patch(
            "/api/versions/00000000-0000-0000-0000-000000000000", {"isActive": False}, format="json"
        )

        assert response.status_code == 404

    def test_delete_version_admin_only(self, admin_client, developer_client):
        created = publish(admin_client, "1.0.0").json()

        assert developer_client.delete(f"/api/versions/{created['id']}").status_code == 403
        assert admin_client.delete(f"/api/versions/{created['id']}").status_code == 204
        assert admin_client.delete(f"/api/versions/{created['id']}").status_code == 404


@pytest.mark.django_db
class TestSettingsAPI:
    """Tests for /api/settings and /api/settings/remote."""

    def test_system_settings_round_trip(self, developer_client, viewer_client):
        response = developer_client.put(
            "/api/settings/", {"company_name": "Acme", "tax_rate": 15}, format="json"
        )

        assert response.status_code == 200
        assert response.json() == {"company_name": "Acme", "tax_rate": 15}
        assert viewer_client.get("/api/settings/").json() == {"company_name": "Acme", "tax_rate": 15}
        assert AuditLogModel.objects.filter(action="UPDATE_SETTINGS").exists()

    def test_settings_update_overwrites_keys(self, admin_client):
        admin_client.put("/api/settings/", {"company_name": "Acme", "tax_rate": 15}, format="json")

        response = admin_client.put("/api/settings/", {"tax_rate": 10}, format="json")

        assert response.json() == {"company_name": "Acme", "tax_rate": 10}

    def test_settings_must_be_object(self, admin_client):
        response = admin_client.put("/api/settings/", ["not", "a", "map"], format="json")

        assert response.status_code == 400

    def test_viewer_cannot_write_settings(self, viewer_client):
        response = viewer_client.put("/api/settings/", {"company_name": "Acme"}, format="json")

        assert response.status_code == 403

    def test_remote_config_read_is_public(self, api_client, admin_client):
        admin_client.put("/api/settings/remote", {"support_phone": "+964 750"}, format="json")

        response = api_client.get("/api/settings/remote")

        assert response.status_code == 200
        assert response.json() == {"support_phone": "+964 750"}

    def test_remote_config_write_requires_login(self, api_client, db):
        response = api_client.put("/api/settings/remote", {"support_phone": "1"}, format="json")

        assert response.status_code == 401
