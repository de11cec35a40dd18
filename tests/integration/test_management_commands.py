"""
Integration tests for management commands, the expiry task and health endpoints.
"""

from datetime import timedelta
from io import StringIO

import pytest
from asgiref.sync import async_to_sync
from django.core.management import call_command
from django.test import Client
from django.utils import timezone

from accounts.infrastructure.models import User as UserModel
from accounts.infrastructure.repositories.django_session_repository import DjangoSessionRepository
from clinics.infrastructure.repositories.django_clinic_repository import DjangoClinicRepository
from core.tasks import expire_licenses, sweep_expired_licenses
from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from plans.infrastructure.models import Currency as CurrencyModel
from plans.infrastructure.models import Plan as PlanModel


def lapse(license, days=1):
    LicenseModel.objects.filter(id=license.id).update(
        status="active", expire_date=timezone.now() - timedelta(days=days)
    )


class RenewedDuringSweep(DjangoLicenseRepository):
    """Renews every lapsed license right after the sweep has read it."""

    async def find_lapsed(self, now):
        lapsed = await super().find_lapsed(now)
        for license in lapsed:
            current = await self.find_by_id(license.id)
            await self.save(current.renew(12))
        return lapsed


@pytest.mark.django_db
class TestSeedData:
    """Tests for the seed_data command."""

    def test_seeds_users_currencies_and_plans(self):
        out = StringIO()

        call_command("seed_data", stdout=out)

        assert UserModel.objects.get(email="admin@sourceplus.com").role == "admin"
        assert UserModel.objects.get(email="ali@sourceplus.com").role == "developer"
        assert set(CurrencyModel.objects.values_list("code", flat=True)) == {"USD", "IQD"}
        assert set(PlanModel.objects.values_list("name", flat=True)) == {"Trial", "Standard"}
        assert "Seed data ready" in out.getvalue()

    def test_is_idempotent(self):
        call_command("seed_data", stdout=StringIO())
        out = StringIO()

        call_command("seed_data", stdout=out)

        assert UserModel.objects.count() == 2
        assert PlanModel.objects.count() == 2
        assert "Plans already exist" in out.getvalue()

    def test_skip_plans(self):
        call_command("seed_data", "--skip-plans", stdout=StringIO())

        assert not PlanModel.objects.exists()


@pytest.mark.django_db
class TestExpirySweep:
    """Tests for the license expiry sweep."""

    def test_dry_run_changes_nothing(self, db_license):
        lapse(db_license)
        out = StringIO()

        call_command("check_license_expirations", "--dry-run", stdout=out)

        assert "Found 1 expired license(s)" in out.getvalue()
        assert db_license.serial in out.getvalue()
        assert LicenseModel.objects.get(id=db_license.id).status == "active"

    def test_marks_lapsed_licenses_expired(self, db_license):
        lapse(db_license)
        out = StringIO()

        call_command("check_license_expirations", stdout=out)

        assert "Successfully marked 1 license(s) as expired" in out.getvalue()
        assert LicenseModel.objects.get(id=db_license.id).status == "expired"

    def test_ignores_current_and_pending_licenses(self, db_license):
        result = expire_licenses()

        assert result.expired == []
        assert LicenseModel.objects.get(id=db_license.id).status == "pending"

    def test_celery_task_summary(self, db_license):
        lapse(db_license)

        summary = sweep_expired_licenses.apply().get()

        assert summary == {"expired": 1, "sessions_revoked": 0}

    def test_renewal_during_sweep_is_kept(self, db_license):
        lapse(db_license)
        handler = ExpireLicensesHandler(
            license_repository=RenewedDuringSweep(),
            clinic_repository=DjangoClinicRepository(),
            session_repository=DjangoSessionRepository(),
        )

        result = async_to_sync(handler.handle)()

        assert result.expired == []
        model = LicenseModel.objects.get(id=db_license.id)
        assert model.status == "active"
        assert model.expire_date > timezone.now()
        assert model.last_renewal_date is not None

    def test_expired_license_fails_validation(self, db_license):
        lapse(db_license)
        expire_licenses()

        response = Client().post(
            "/license/validate", {"serial": db_license.serial}, content_type="application/json"
        )

        assert response.json()["valid"] is False
        assert response.json()["status"] == "expired"


@pytest.mark.django_db
class TestHealthEndpoints:
    """Tests for liveness, readiness and metrics."""

    def test_health(self):
        response = Client().get("/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health_db(self):
        assert Client().get("/health/db/").json() == {"status": "healthy", "database": "connected"}

    def test_health_cache(self):
        assert Client().get("/health/cache/").json() == {"status": "healthy", "cache": "connected"}

    def test_ready(self):
        response = Client().get("/ready/")

        assert response.status_code == 200
        assert response.json()["checks"] == {"database": True, "cache": True}

    def test_metrics(self):
        response = Client().get("/metrics/")

        assert response.status_code == 200
        assert b"http_requests_total" in response.content
