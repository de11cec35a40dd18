"""
Unit tests for app versions, update checks and client configuration.
"""

import pytest

from core.domain.exceptions import DomainValidationError
from releases.domain.app_version import AppVersion, UpdateCheck
from releases.domain.settings import client_config, validate_entries


def release(version="2.1.0", force_update=False):
    return AppVersion.publish(
        version=version,
        download_url="https://downloads.example.com/pos-2.1.0.exe",
        release_notes="Faster receipts",
        force_update=force_update,
    )


class TestAppVersion:
    """Tests for AppVersion domain entity."""

    def test_publish(self):
        version = release()

        assert version.version == "2.1.0"
        assert version.is_active is True

    def test_publish_rejects_bad_url(self):
        with pytest.raises(DomainValidationError):
            AppVersion.publish(version="2.1.0", download_url="ftp://example.com/file")

    def test_publish_requires_version(self):
        with pytest.raises(DomainValidationError):
            AppVersion.publish(version=" ", download_url="https://example.com/file")

    def test_with_changes_keeps_unset_fields(self):
        version = release().with_changes(is_active=False)

        assert version.is_active is False
        assert version.release_notes == "Faster receipts"


class TestUpdateCheck:
    """Tests for the client update check."""

    def test_no_release(self):
        check = UpdateCheck.against(None, "1.0.0")

        assert check.has_update is False
        assert check.version is None

    def test_same_version(self):
        check = UpdateCheck.against(release(force_update=True), "2.1.0")

        assert check.has_update is False
        assert check.force_update is False

    def test_different_version(self):
        check = UpdateCheck.against(release(force_update=True), "2.0.9")

        assert check.has_update is True
        assert check.force_update is True
        assert check.download_url.endswith("pos-2.1.0.exe")

    def test_missing_version_always_updates(self):
        assert UpdateCheck.against(release(), None).has_update is True


class TestClientConfig:
    """Tests for settings helpers."""

    def test_defaults(self):
        assert client_config({}) == {"maintenance_mode": False, "support_phone": "", "features": {}}

    def test_stored_values_override_defaults(self):
        config = client_config({"maintenance_mode": 1, "support_phone": "0770", "banner": "Eid sale"})

        assert config["maintenance_mode"] is True
        assert config["support_phone"] == "0770"
        assert config["banner"] == "Eid sale"

    def test_malformed_features_reset(self):
        assert client_config({"features": "all"})["features"] == {}

    def test_validate_entries(self):
        assert validate_entries({"currency": "IQD"}) == {"currency": "IQD"}
        with pytest.raises(DomainValidationError):
            validate_entries(["currency"])
        with pytest.raises(DomainValidationError):
            validate_entries({" ": 1})
