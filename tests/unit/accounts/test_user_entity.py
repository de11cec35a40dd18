"""
Unit tests for User and Session domain entities.
"""

import uuid
from datetime import timedelta

import pytest

from accounts.domain.session import Session
from accounts.domain.user import User, validate_password
from core.domain.dates import utcnow
from core.domain.exceptions import AccountInactiveError, DomainValidationError
from core.domain.value_objects import RegistrationStatus, Role


class TestUserEntity:
    """Tests for User domain entity."""

    def test_create_user(self):
        user = User.create(name=" Sara ", email="Sara@Example.com", role=Role.ADMIN)

        assert user.name == "Sara"
        assert user.email == "sara@example.com"
        assert user.is_admin is True
        assert user.is_approved is True

    def test_invalid_email(self):
        with pytest.raises(DomainValidationError):
            User.create(name="Sara", email="sara")

    def test_password_length(self):
        assert validate_password("abcdef") == "abcdef"
        with pytest.raises(DomainValidationError):
            validate_password("abc")

    def test_pending_user_cannot_sign_in(self):
        user = User.create(name="Dr Ali", email="ali@example.com", status=RegistrationStatus.PENDING)

        with pytest.raises(AccountInactiveError):
            user.ensure_can_sign_in()

    def test_user_of_suspended_clinic_cannot_sign_in(self):
        user = User.create(name="Dr Ali", email="ali@example.com", role=Role.CLINIC_ADMIN, clinic_id=uuid.uuid4())

        with pytest.raises(AccountInactiveError) as exc:
            user.ensure_can_sign_in(RegistrationStatus.SUSPENDED)

        assert exc.value.message == "Clinic is suspended"

    def test_signed_in(self):
        user = User.create(name="Sara", email="sara@example.com").signed_in("10.0.0.1")

        assert user.last_login is not None
        assert user.last_login_ip == "10.0.0.1"


class TestSession:
    """Tests for Session domain entity."""

    def test_open_truncates_user_agent(self):
        session = Session.open(uuid.uuid4(), "jti", utcnow() + timedelta(days=7), user_agent="x" * 600)

        assert len(session.user_agent) == 500
        assert session.is_expired() is False

    def test_expired(self):
        session = Session.open(uuid.uuid4(), "jti", utcnow() - timedelta(seconds=1))

        assert session.is_expired() is True
