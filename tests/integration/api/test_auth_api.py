"""
Integration tests for authentication and user management endpoints.
"""

import pytest
from rest_framework.test import APIClient

from accounts.infrastructure.models import Session, User
from audit.infrastructure.models import AuditLog


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthAPI:
    """Integration tests for Auth API."""

    def test_login_success(self, api_client, admin_user, password):
        """Test a login returns both tokens and opens a session."""
        response = api_client.post(
            "/api/auth/login",
            {"email": "ADMIN@example.com", "password": password},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["accessToken"]
        assert data["refreshToken"]
        assert data["user"]["email"] == "admin@example.com"
        assert data["user"]["role"] == "admin"
        assert Session.objects.filter(user=admin_user).count() == 1
        assert AuditLog.objects.filter(action="LOGIN").exists()

        admin_user.refresh_from_db()
        assert admin_user.last_login is not None

    def test_login_wrong_password(self, api_client, admin_user):
        response = api_client.post(
            "/api/auth/login", {"email": admin_user.email, "password": "wrong-pass"}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_missing_fields(self, api_client, db):
        response = api_client.post("/api/auth/login", {}, format="json")

        assert response.status_code == 400

    def test_login_pending_user(self, api_client, make_user, password):
        """Test users that are not approved cannot log in."""
        user = make_user("pending@example.com", status="PENDING")

        response = api_client.post("/api/auth/login", {"email": user.email, "password": password}, format="json")

        assert response.status_code == 403

    def test_me(self, admin_client, admin_user):
        response = admin_client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["id"] == str(admin_user.id)

    def test_me_requires_token(self, api_client, db):
        assert api_client.get("/api/auth/me").status_code == 401

    def test_refresh(self, api_client, admin_user, password):
        tokens = api_client.post(
            "/api/auth/login", {"email": admin_user.email, "password": password}, format="json"
        ).json()

        response = api_client.post("/api/auth/refresh", {"refreshToken": tokens["refreshToken"]}, format="json")

        assert response.status_code == 200
        assert response.json()["accessToken"]

    def test_refresh_with_garbage(self, api_client, db):
        response = api_client.post("/api/auth/refresh", {"refreshToken": "not-a-token"}, format="json")

        assert response.status_code == 401

    def test_logout_revokes_session(self, admin_client):
        """Test the access token stops working once its session is gone."""
        assert admin_client.post("/api/auth/logout").status_code == 204

        assert admin_client.get("/api/auth/me").status_code == 401

    def test_suspended_user_loses_access(self, admin_client, admin_user):
        User.objects.filter(pk=admin_user.pk).update(status="SUSPENDED")

        response = admin_client.get("/api/auth/me")

        assert response.status_code == 403
        assert not Session.objects.filter(user=admin_user).exists()


@pytest.mark.django_db
@pytest.mark.integration
class TestUserAPI:
    """Integration tests for User management API."""

    def test_create_user(self, admin_client, login):
        response = admin_client.post(
            "/api/users/",
            {"name": "Dev One", "email": "dev1@example.com", "password": "secret1", "role": "developer"},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["role"] == "developer"
        assert login(APIClient(), "dev1@example.com", "secret1").get("/api/auth/me").status_code == 200

    def test_create_user_duplicate_email(self, admin_client, admin_user):
        response = admin_client.post(
            "/api/users/",
            {"name": "Twin", "email": admin_user.email, "password": "secret1", "role": "viewer"},
            format="json",
        )

        assert response.status_code == 409

    def test_list_users_requires_admin(self, viewer_client):
        assert viewer_client.get("/api/users/").status_code == 403

    def test_list_users(self, admin_client):
        response = admin_client.get("/api/users/")

        assert response.status_code == 200
        assert [user["email"] for user in response.json()] == ["admin@example.com"]

    def test_delete_user(self, admin_client, make_user):
        user = make_user("gone@example.com")

        response = admin_client.delete(f"/api/users/{user.id}")

        assert response.status_code == 204
        assert not User.objects.filter(pk=user.pk).exists()

    def test_cannot_delete_self(self, admin_client, admin_user):
        response = admin_client.delete(f"/api/users/{admin_user.id}")

        assert response.status_code == 400
        assert User.objects.filter(pk=admin_user.pk).exists()
