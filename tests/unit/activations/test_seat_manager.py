"""
Unit tests for SeatManager domain service.
"""

import uuid
from datetime import datetime, timezone

import pytest

from activations.domain.device import Device
from activations.domain.services import SeatManager
from core.domain.exceptions import DeviceLimitExceededError, LicensePausedError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License

NOW = datetime(2026, 2, 1, tzinfo=timezone.utc)


def license_with_limit(device_limit):
    return License.issue(
        serial="SP-2026-AAAA-BBBB-CCCC",
        plan_id=uuid.uuid4(),
        duration_months=12,
        device_limit=device_limit,
        customer_name="Corner Shop",
        now=NOW,
    )


class TestSeatManager:
    """Tests for SeatManager service."""

    def test_has_free_seat(self):
        license = license_with_limit(2)

        assert SeatManager.has_free_seat(license, 1) is True
        assert SeatManager.has_free_seat(license, 2) is False

    def test_zero_limit_is_unlimited(self):
        assert SeatManager.has_free_seat(license_with_limit(0), 1000) is True

    def test_bind_new_device(self):
        """Test binding activates the license and creates a device."""
        binding = SeatManager.bind(license_with_limit(1), None, 0, "HW-1", device_name="Till 1", now=NOW)

        assert binding.reactivation is False
        assert binding.device.hardware_id == "HW-1"
        assert binding.device.device_name == "Till 1"
        assert binding.license.status == LicenseStatus.ACTIVE
        assert binding.license.activation_count == 1

    def test_bind_over_limit(self):
        with pytest.raises(DeviceLimitExceededError):
            SeatManager.bind(license_with_limit(1), None, 1, "HW-2", now=NOW)

    def test_rebind_known_device_ignores_limit(self):
        license = license_with_limit(1)
        existing = Device.create(license.id, "HW-1", device_name="Till 1", now=NOW)

        binding = SeatManager.bind(license, existing, 1, "HW-1", app_version="2.0.0", now=NOW)

        assert binding.reactivation is True
        assert binding.device.id == existing.id
        assert binding.device.device_name == "Till 1"
        assert binding.device.app_version == "2.0.0"

    def test_inactive_device_needs_a_free_seat(self):
        from dataclasses import replace

        license = license_with_limit(1)
        existing = replace(Device.create(license.id, "HW-1", now=NOW), is_active=False)

        with pytest.raises(DeviceLimitExceededError):
            SeatManager.bind(license, existing, 1, "HW-1", now=NOW)

    def test_paused_license_cannot_bind(self):
        with pytest.raises(LicensePausedError):
            SeatManager.bind(license_with_limit(1).pause(), None, 0, "HW-1", now=NOW)
