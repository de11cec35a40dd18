"""
Unit tests for the clinic entity, its controls and the subscription resolver.
"""

import json
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from clinics.domain.clinic import Clinic
from clinics.domain.controls import (
    DEFAULT_FEATURES,
    ClinicControl,
    ControlsUpdate,
    describe_changes,
    diff_controls,
)
from clinics.domain.services import SubscriptionStatusResolver
from core.domain.exceptions import (
    ClinicAlreadyApprovedError,
    DomainValidationError,
    InvalidClinicStatusError,
)
from core.domain.value_objects import LicenseStatus, ProductType, RegistrationStatus
from licenses.domain.license import License
from plans.domain.plan import Plan

NOW = datetime(2026, 6, 1, 9, 0, tzinfo=timezone.utc)


def pending_clinic():
    return Clinic.register(name="Smile Clinic", email="Info@Smile.example", hwid="HWID-12345")


def clinic_license(**overrides):
    license = License.issue(
        serial="SP-2026-CLIN-ICAA-BBBB",
        plan_id=uuid.uuid4(),
        duration_months=1,
        device_limit=1,
        customer_name="Smile Clinic",
        product_type=ProductType.CLINIC,
        status=LicenseStatus.ACTIVE,
        now=NOW,
    )
    return replace(license, **overrides)


class TestClinicEntity:
    """Tests for Clinic domain entity."""

    def test_register(self):
        clinic = pending_clinic()

        assert clinic.status == RegistrationStatus.PENDING
        assert clinic.email == "info@smile.example"
        assert clinic.license_id is None

    @pytest.mark.parametrize(
        "name,email,hwid",
        [("S", "a@b.c", "HWID-1"), ("Smile", "nope", "HWID-1"), ("Smile", "a@b.c", "HW")],
    )
    def test_register_validation(self, name, email, hwid):
        with pytest.raises(DomainValidationError):
            Clinic.register(name=name, email=email, hwid=hwid)

    def test_approve(self):
        license_id = uuid.uuid4()

        clinic = pending_clinic().approve(license_id)

        assert clinic.is_approved
        assert clinic.license_id == license_id

    def test_rejected_clinic_can_be_approved(self):
        assert pending_clinic().reject().approve(uuid.uuid4()).is_approved

    def test_approve_twice(self):
        with pytest.raises(ClinicAlreadyApprovedError):
            pending_clinic().approve(uuid.uuid4()).approve(uuid.uuid4())

    def test_suspended_clinic_cannot_be_approved(self):
        suspended = pending_clinic().approve(uuid.uuid4()).toggle_suspension()

        with pytest.raises(InvalidClinicStatusError):
            suspended.ensure_approvable()

    def test_reject_only_pending(self):
        with pytest.raises(InvalidClinicStatusError):
            pending_clinic().approve(uuid.uuid4()).reject()

    def test_toggle_suspension(self):
        approved = pending_clinic().approve(uuid.uuid4())

        suspended = approved.toggle_suspension()
        assert suspended.status == RegistrationStatus.SUSPENDED
        assert suspended.toggle_suspension().status == RegistrationStatus.APPROVED

    def test_toggle_pending_clinic(self):
        with pytest.raises(InvalidClinicStatusError):
            pending_clinic().toggle_suspension()


class TestClinicControls:
    """Tests for ClinicControl and ControlsUpdate."""

    def test_defaults(self):
        control = ClinicControl.defaults(uuid.uuid4())

        assert control.storage_limit_mb == 1024
        assert control.users_limit == 3
        assert control.patients_limit is None
        assert control.features == DEFAULT_FEATURES
        assert control.locked is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"storage_limit_mb": 0},
            {"users_limit": True},
            {"users_limit": "5"},
            {"patients_limit": -3},
            {"features": {"billing": True}},
            {"features": {"xray": "yes"}},
            {"locked": "true"},
            {"lock_reason": 12},
        ],
    )
    def test_invalid_update(self, kwargs):
        with pytest.raises(DomainValidationError):
            ControlsUpdate(**kwargs)

    def test_partial_update_keeps_other_fields(self):
        control = ClinicControl.defaults(uuid.uuid4())

        updated = control.apply(ControlsUpdate(users_limit=10, features={"xray": True}))

        assert updated.users_limit == 10
        assert updated.storage_limit_mb == 1024
        assert updated.features["xray"] is True
        assert updated.features["patients"] is True

    def test_patients_limit_can_be_cleared(self):
        control = replace(ClinicControl.defaults(uuid.uuid4()), patients_limit=500)

        assert control.apply(ControlsUpdate(patients_limit=None)).patients_limit is None

    def test_lock_requires_reason(self):
        with pytest.raises(DomainValidationError):
            ClinicControl.defaults(uuid.uuid4()).apply(ControlsUpdate(locked=True, lock_reason="  "))

    def test_unlock_clears_reason(self):
        locked = ClinicControl.defaults(uuid.uuid4()).apply(ControlsUpdate(locked=True, lock_reason=" Unpaid "))
        assert locked.lock_reason == "Unpaid"

        assert locked.apply(ControlsUpdate(locked=False)).lock_reason is None

    def test_snapshot_uses_wire_names(self):
        snapshot = ClinicControl.defaults(uuid.uuid4()).snapshot()

        assert list(snapshot) == ["storageLimitMB", "usersLimit", "patientsLimit", "features", "locked", "lockReason"]
        assert list(snapshot["features"]) == ["patients", "appointments", "orthodontics", "xray", "ai"]

    def test_diff_lists_each_change(self):
        before = ClinicControl.defaults(uuid.uuid4())
        after = before.apply(
            ControlsUpdate(storage_limit_mb=2048, features={"ai": True}, locked=True, lock_reason="Unpaid")
        )

        assert diff_controls(before, after) == [
            "storage: 1024MB → 2048MB",
            "locked: false → true",
            'lockReason: "none" → "Unpaid"',
            "features: ai: false → true",
        ]

    def test_describe_changes(self):
        before = ClinicControl.defaults(uuid.uuid4())
        after = before.apply(ControlsUpdate(users_limit=5))

        line = describe_changes("Smile Clinic", before, after)

        assert line.startswith("Updated controls for clinic Smile Clinic: users: 3 → 5. Before: ")
        after_json = line.split(". After: ", 1)[1]
        assert json.loads(after_json)["usersLimit"] == 5

    def test_describe_no_changes(self):
        control = ClinicControl.defaults(uuid.uuid4())

        assert "Smile Clinic: No changes." in describe_changes("Smile Clinic", control, control)


class TestSubscriptionStatusResolver:
    """Tests for SubscriptionStatusResolver service."""

    def approved(self):
        return pending_clinic().approve(uuid.uuid4())

    def test_pending_clinic_forced_out(self):
        status = SubscriptionStatusResolver.resolve(pending_clinic(), clinic_license(), now=NOW)

        assert status.force_logout is True
        assert status.license is None
        assert status.remaining_days == 0

    def test_approved_without_license_forced_out(self):
        assert SubscriptionStatusResolver.resolve(self.approved(), None, now=NOW).force_logout is True

    def test_active_license(self):
        plan = Plan.create(name="Clinic Monthly", duration_months=1, features={"xray": True})

        status = SubscriptionStatusResolver.resolve(self.approved(), clinic_license(), plan, now=NOW)

        assert status.force_logout is False
        assert status.remaining_days == 30
        assert status.license["serial"] == "SP-2026-CLIN-ICAA-BBBB"
        assert status.license["plan"]["features"] == {"xray": True}

    def test_paused_license_forced_out(self):
        status = SubscriptionStatusResolver.resolve(self.approved(), clinic_license().pause(), now=NOW)

        assert status.force_logout is True
        assert status.license["status"] == "paused"

    def test_expired_license_forced_out(self):
        status = SubscriptionStatusResolver.resolve(
            self.approved(), clinic_license(), now=NOW + timedelta(days=31)
        )

        assert status.force_logout is True
        assert status.remaining_days == 0

    def test_license_without_expiry_stays_active(self):
        status = SubscriptionStatusResolver.resolve(self.approved(), clinic_license(expire_date=None), now=NOW)

        assert status.force_logout is False
