"""
Pytest configuration and shared fixtures.
"""

from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.core.cache import cache

from accounts.infrastructure.models import User as UserModel
from accounts.infrastructure.repositories.django_session_repository import DjangoSessionRepository
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from activations.infrastructure.repositories.django_device_repository import DjangoDeviceRepository
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from clinics.infrastructure.repositories.django_clinic_repository import DjangoClinicRepository
from clinics.infrastructure.repositories.django_control_repository import DjangoClinicControlRepository
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from plans.domain.plan import Plan, PlanPrice
from plans.infrastructure.repositories.django_plan_repository import DjangoPlanRepository

PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def clear_cache():
    """Validation results are cached; start every test cold."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def plan_repository():
    """Fixture for PlanRepository."""
    return DjangoPlanRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def transaction_repository():
    """Fixture for TransactionRepository."""
    return DjangoTransactionRepository()


@pytest.fixture
def device_repository():
    """Fixture for DeviceRepository."""
    return DjangoDeviceRepository()


@pytest.fixture
def clinic_repository():
    """Fixture for ClinicRepository."""
    return DjangoClinicRepository()


@pytest.fixture
def control_repository():
    """Fixture for ClinicControlRepository."""
    return DjangoClinicControlRepository()


@pytest.fixture
def user_repository():
    return DjangoUserRepository()


@pytest.fixture
def session_repository():
    return DjangoSessionRepository()


@pytest.fixture
def audit_log_repository():
    return DjangoAuditLogRepository()


@pytest.fixture
def sample_plan():
    """Fixture for a paid yearly Plan entity allowing two devices."""
    return Plan.create(
        name="Standard",
        duration_months=12,
        device_limit=2,
        prices=[PlanPrice(currency="USD", monthly_price=Decimal("10"), period_price=Decimal("120"), is_primary=True)],
        features={"reports": True},
        limits={"products": 500},
    )


@pytest.fixture
def db_plan(db, plan_repository, sample_plan):
    """Fixture for a Plan saved in database."""
    return async_to_sync(plan_repository.save)(sample_plan)


@pytest.fixture
def db_license(db, db_plan, license_repository):
    """Fixture for a pending POS License saved in database."""
    license = License.issue(
        serial="SP-2026-AAAA-BBBB-CCCC",
        plan_id=db_plan.id,
        duration_months=db_plan.duration_months,
        device_limit=db_plan.device_limit,
        customer_name="Corner Shop",
    )
    return async_to_sync(license_repository.insert)(license)


def _create_user(email, role="viewer", **extra):
    extra.setdefault("name", email.split("@")[0].title())
    extra.setdefault("status", "APPROVED")
    return UserModel.objects.create_user(email=email, password=PASSWORD, role=role, **extra)


def _login(client, email, password=PASSWORD):
    response = client.post("/api/auth/login", {"email": email, "password": password}, format="json")
    assert response.status_code == 200, response.content
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.json()['accessToken']}")
    return client


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_user(db):
    return UserModel.objects.create_superuser(email="admin@example.com", password=PASSWORD, name="Admin")


@pytest.fixture
def admin_client(admin_user):
    """API client signed in as an administrator."""
    from rest_framework.test import APIClient

    return _login(APIClient(), admin_user.email)


@pytest.fixture
def developer_client(db):
    from rest_framework.test import APIClient

    user = _create_user("dev@example.com", role="developer")
    return _login(APIClient(), user.email)


@pytest.fixture
def viewer_client(db):
    """API client signed in as a read-only viewer."""
    from rest_framework.test import APIClient

    user = _create_user("viewer@example.com", role="viewer")
    return _login(APIClient(), user.email)


@pytest.fixture
def password():
    """Password shared by every user the fixtures create."""
    return PASSWORD


@pytest.fixture
def make_user(db):
    """Factory creating an approved back-office user."""
    return _create_user


@pytest.fixture
def login(db):
    """Factory logging an API client in through /api/auth/login."""
    return _login
