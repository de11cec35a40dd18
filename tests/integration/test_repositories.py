"""
Integration tests for the Django repositories.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from clinics.domain.controls import ControlsUpdate
from core.domain.exceptions import (
    DeviceLimitExceededError,
    DuplicateError,
    DuplicateSerialError,
    LicenseNotFoundError,
    StateConflictError,
)
from core.domain.value_objects import LicenseStatus, Money, TransactionType
from licenses.domain.license import License
from licenses.domain.transaction import Transaction
from plans.domain.currency import Currency
from plans.domain.plan import Plan, PlanPrice
from plans.infrastructure.repositories.django_currency_repository import DjangoCurrencyRepository


@pytest.fixture
def currency_repository():
    return DjangoCurrencyRepository()


@pytest.mark.django_db
class TestPlanRepository:
    """Tests for DjangoPlanRepository."""

    def test_save_and_find(self, plan_repository, db_plan):
        found = async_to_sync(plan_repository.find_by_id)(db_plan.id)

        assert found.name == "Standard"
        assert found.features == {"reports": True}
        assert found.limits == {"products": 500}
        assert [price.currency for price in found.prices] == ["USD"]
        assert found.prices[0].period_price == Decimal("120")

    def test_save_replaces_prices(self, plan_repository, db_plan):
        updated = db_plan.with_prices(
            prices=[PlanPrice(currency="EUR", period_price=Decimal("110"), is_primary=True)]
        )

        async_to_sync(plan_repository.save)(updated)
        found = async_to_sync(plan_repository.find_by_id)(db_plan.id)

        assert [price.currency for price in found.prices] == ["EUR"]

    def test_first_active_is_earliest(self, plan_repository, db_plan):
        async_to_sync(plan_repository.save)(Plan.create(name="Later", duration_months=1))

        assert async_to_sync(plan_repository.first_active)().id == db_plan.id

        async_to_sync(plan_repository.save)(db_plan.set_active(False))
        assert async_to_sync(plan_repository.first_active)().name == "Later"

    def test_list_active_only(self, plan_repository, db_plan):
        async_to_sync(plan_repository.save)(Plan.create(name="Retired", is_active=False))

        names = [plan.name for plan in async_to_sync(plan_repository.list_all)(active_only=True)]

        assert names == ["Standard"]

    def test_delete_plan_with_licenses(self, plan_repository, db_license):
        with pytest.raises(StateConflictError):
            async_to_sync(plan_repository.delete)(db_license.plan_id)

    def test_delete_unknown_plan(self, plan_repository, db, sample_plan):
        assert async_to_sync(plan_repository.delete)(sample_plan.id) is False


@pytest.mark.django_db
class TestLicenseRepository:
    """Tests for DjangoLicenseRepository."""

    def test_find_by_serial(self, license_repository, db_license):
        found = async_to_sync(license_repository.find_by_serial)(db_license.serial)

        assert found.id == db_license.id
        assert found.status == LicenseStatus.PENDING
        assert async_to_sync(license_repository.find_by_serial)("missing") is None

    def test_duplicate_serial(self, license_repository, db_license, db_plan):
        clash = License.issue(
            serial=db_license.serial,
            plan_id=db_plan.id,
            duration_months=1,
            device_limit=1,
            customer_name="Other Shop",
        )

        with pytest.raises(DuplicateSerialError):
            async_to_sync(license_repository.insert)(clash)

    def test_save_round_trips_state(self, license_repository, db_license):
        async_to_sync(license_repository.save)(db_license.pause())

        found = async_to_sync(license_repository.find_by_id)(db_license.id)

        assert found.status == LicenseStatus.PAUSED
        assert found.is_paused is True

    def test_find_lapsed(self, license_repository, db_license):
        now = timezone.now()
        active = db_license.record_activation("HW-1", now=now)
        async_to_sync(license_repository.save)(active)

        assert async_to_sync(license_repository.find_lapsed)(now) == []
        lapsed = async_to_sync(license_repository.find_lapsed)(now + timedelta(days=400))
        assert [license.id for license in lapsed] == [db_license.id]

    def test_expire_if_lapsed_is_conditional(self, license_repository, db_license):
        now = timezone.now()
        async_to_sync(license_repository.save)(db_license.record_activation("HW-1", now=now))

        assert async_to_sync(license_repository.expire_if_lapsed)(db_license.id, now) is False
        later = now + timedelta(days=400)
        assert async_to_sync(license_repository.expire_if_lapsed)(db_license.id, later) is True
        assert async_to_sync(license_repository.find_by_id)(db_license.id).status == LicenseStatus.EXPIRED
        assert async_to_sync(license_repository.expire_if_lapsed)(db_license.id, later) is False

    def test_counters(self, license_repository, db_license):
        async_to_sync(license_repository.save)(db_license.record_activation("HW-1"))

        assert async_to_sync(license_repository.count_by_status)(LicenseStatus.ACTIVE) == 1
        assert async_to_sync(license_repository.count_by_status)(LicenseStatus.EXPIRED) == 0
        assert async_to_sync(license_repository.count_customers)() == 1

    def test_delete(self, license_repository, db_license):
        assert async_to_sync(license_repository.delete)(db_license.id) is True
        assert async_to_sync(license_repository.find_by_id)(db_license.id) is None


@pytest.mark.django_db
class TestTransactionRepository:
    """Tests for DjangoTransactionRepository."""

    def test_add_and_list(self, transaction_repository, db_license):
        transaction = Transaction.record(
            license_id=db_license.id,
            customer_name="Corner Shop",
            plan_name="Standard",
            price=Money(Decimal("120"), "USD"),
            transaction_type=TransactionType.PURCHASE,
        )

        async_to_sync(transaction_repository.add)(transaction)

        recent = async_to_sync(transaction_repository.list_recent)()
        assert [t.id for t in recent] == [transaction.id]
        assert recent[0].amount == Decimal("120")
        assert async_to_sync(transaction_repository.list_completed)(timezone.now() + timedelta(days=1)) == []


@pytest.mark.django_db
class TestCurrencyRepository:
    """Tests for DjangoCurrencyRepository."""

    def test_add_and_duplicate(self, currency_repository):
        async_to_sync(currency_repository.add)(Currency.create("IQD", Decimal("1310"), "IQD"))

        with pytest.raises(DuplicateError):
            async_to_sync(currency_repository.add)(Currency.create("IQD", Decimal("1300"), "IQD"))

    def test_update_rates_skips_base_currency(self, currency_repository):
        async_to_sync(currency_repository.add)(Currency.create("USD", Decimal("1"), "$"))
        async_to_sync(currency_repository.add)(Currency.create("IQD", Decimal("1310"), "IQD"))

        updated = async_to_sync(currency_repository.update_rates)(
            {"USD": Decimal("2"), "IQD": Decimal("1320.5"), "EUR": Decimal("0.9")}
        )

        assert updated == 1
        rates = {c.code: c.rate for c in async_to_sync(currency_repository.list_all)()}
        assert rates["USD"] == Decimal("1")
        assert rates["IQD"] == Decimal("1320.5")


@pytest.mark.django_db
class TestDeviceRepository:
    """Tests for DjangoDeviceRepository."""

    def test_bind_and_limit(self, device_repository, db_license):
        first = async_to_sync(device_repository.bind)(serial=db_license.serial, hardware_id="HW-1")
        async_to_sync(device_repository.bind)(serial=db_license.serial, hardware_id="HW-2")

        assert first.reactivation is False
        assert async_to_sync(device_repository.count_active)(db_license.id) == 2
        with pytest.raises(DeviceLimitExceededError):
            async_to_sync(device_repository.bind)(serial=db_license.serial, hardware_id="HW-3")

        again = async_to_sync(device_repository.bind)(serial=db_license.serial, hardware_id="HW-1")
        assert again.reactivation is True
        assert again.license.activation_count == 3

    def test_bind_unknown_serial(self, device_repository, db):
        with pytest.raises(LicenseNotFoundError):
            async_to_sync(device_repository.bind)(serial="nope", hardware_id="HW-1")

    def test_check_in_unknown_serial(self, device_repository, db):
        assert async_to_sync(device_repository.check_in)(serial="nope", hardware_id=None) is None


@pytest.mark.django_db
class TestControlRepository:
    """Tests for DjangoClinicControlRepository."""

    def test_get_or_create_then_save(self, clinic_repository, control_repository, api_client):
        response = api_client.post(
            "/api/clinics/register",
            {"name": "Smile Dental", "email": "smile@example.com", "password": "clinic-pass", "hwid": "HWID-12345"},
            format="json",
        )
        clinic = async_to_sync(clinic_repository.find_by_id)(uuid.UUID(response.json()["id"]))

        control = async_to_sync(control_repository.get_or_create)(clinic.id)
        assert control.users_limit == 3

        async_to_sync(control_repository.save)(control.apply(ControlsUpdate(users_limit=7)))

        assert async_to_sync(control_repository.get_or_create)(clinic.id).users_limit == 7
