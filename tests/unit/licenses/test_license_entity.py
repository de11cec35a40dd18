"""
Unit tests for License domain entity.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import (
    DomainValidationError,
    LicenseExpiredError,
    LicensePausedError,
    LicenseRevokedError,
)
from core.domain.value_objects import LicenseStatus, ProductType
from licenses.domain.license import License

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def issue(**overrides):
    values = {
        "serial": "SP-2026-AAAA-BBBB-CCCC",
        "plan_id": uuid.uuid4(),
        "duration_months": 12,
        "device_limit": 1,
        "customer_name": "Corner Shop",
        "now": NOW,
    }
    values.update(overrides)
    return License.issue(**values)


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_issue_license(self):
        """Test issuing a license under a plan."""
        license = issue()

        assert license.status == LicenseStatus.PENDING
        assert license.is_paused is False
        assert license.product_type == ProductType.POS
        assert license.expire_date == datetime(2027, 3, 15, 12, 0, tzinfo=timezone.utc)
        assert license.activation_count == 0
        assert license.hardware_id is None

    def test_issue_paused_license_sets_flag(self):
        license = issue(status=LicenseStatus.PAUSED)

        assert license.is_paused is True

    def test_empty_serial_rejected(self):
        with pytest.raises(DomainValidationError):
            issue(serial="  ")

    def test_negative_device_limit_rejected(self):
        with pytest.raises(DomainValidationError):
            issue(device_limit=-1)

    def test_is_valid_requires_active_status(self):
        """A freshly issued stock license is not yet valid."""
        license = issue()

        assert license.is_valid(NOW) is False
        assert license.record_activation("HW-1", now=NOW).is_valid(NOW) is True

    def test_is_valid_expired_license(self):
        license = issue().record_activation("HW-1", now=NOW)

        assert license.is_valid(NOW + timedelta(days=400)) is False
        assert license.is_expired(NOW + timedelta(days=400)) is True

    def test_license_without_expiry_never_expires(self):
        from dataclasses import replace

        license = replace(issue(), expire_date=None)

        assert license.is_expired(NOW + timedelta(days=10000)) is False

    def test_remaining_days_rounds_up(self):
        license = issue()

        assert license.remaining_days(license.expire_date - timedelta(hours=1)) == 1
        assert license.remaining_days(license.expire_date + timedelta(days=3)) == 0

    def test_ensure_activatable_revoked(self):
        with pytest.raises(LicenseRevokedError):
            issue().revoke().ensure_activatable(NOW)

    def test_ensure_activatable_expired(self):
        with pytest.raises(LicenseExpiredError):
            issue().ensure_activatable(NOW + timedelta(days=400))

    def test_ensure_activatable_paused(self):
        with pytest.raises(LicensePausedError):
            issue().pause().ensure_activatable(NOW)

    def test_record_activation(self):
        """Test an activation stamps the device and activates the license."""
        license = issue().record_activation("HW-1", now=NOW)

        assert license.status == LicenseStatus.ACTIVE
        assert license.hardware_id == "HW-1"
        assert license.activation_count == 1
        assert license.activation_date == NOW
        assert license.last_check_in == NOW

    def test_record_activation_keeps_latest_hardware_id(self):
        license = issue().record_activation("HW-1", now=NOW).record_activation("HW-2", now=NOW)

        assert license.hardware_id == "HW-2"
        assert license.activation_count == 2

    def test_pause_and_resume_keep_flag_in_sync(self):
        paused = issue().record_activation("HW-1", now=NOW).pause()
        assert paused.status == LicenseStatus.PAUSED
        assert paused.is_paused is True

        resumed = paused.resume()
        assert resumed.status == LicenseStatus.ACTIVE
        assert resumed.is_paused is False

    def test_toggle_pause(self):
        license = issue()

        assert license.toggle_pause().is_paused is True
        assert license.toggle_pause().toggle_pause().is_paused is False

    def test_toggle_pause_revoked_license(self):
        with pytest.raises(LicenseRevokedError):
            issue().revoke().toggle_pause()

    def test_revoke(self):
        license = issue().pause().revoke()

        assert license.status == LicenseStatus.REVOKED
        assert license.is_paused is False

    def test_renew_extends_from_current_expiry(self):
        license = issue()

        renewed = license.renew(6, now=NOW)

        assert renewed.expire_date == datetime(2027, 9, 15, 12, 0, tzinfo=timezone.utc)
        assert renewed.status == LicenseStatus.ACTIVE
        assert renewed.last_renewal_date == NOW

    def test_renew_lapsed_license_starts_from_now(self):
        """Test renewing an expired license counts from today."""
        license = issue(now=NOW - timedelta(days=800))
        renewed = license.renew(1, now=NOW)

        assert renewed.expire_date == datetime(2026, 4, 15, 12, 0, tzinfo=timezone.utc)

    def test_renew_rejects_non_positive_months(self):
        with pytest.raises(DomainValidationError):
            issue().renew(0)

    def test_renew_revoked_license(self):
        with pytest.raises(LicenseRevokedError):
            issue().revoke().renew(1)

    def test_admin_changes_can_leave_revoked_state(self):
        license = issue().revoke().with_admin_changes(status=LicenseStatus.ACTIVE)

        assert license.status == LicenseStatus.ACTIVE

    def test_admin_changes_clear_hardware_id(self):
        license = issue().record_activation("HW-1", now=NOW).with_admin_changes(hardware_id="")

        assert license.hardware_id is None

    def test_admin_changes_validate_customer_name(self):
        with pytest.raises(DomainValidationError):
            issue().with_admin_changes(customer_name="x")
