"""
Settings and remote configuration helpers.
"""
from typing import Any, Dict

from core.domain.exceptions import DomainValidationError

DEFAULT_CLIENT_CONFIG: Dict[str, Any] = {
    "maintenance_mode": False,
    "support_phone": "",
    "features": {},
}


def validate_entries(entries: Any) -> Dict[str, Any]:
    """
    Check a settings payload is a map with non-empty string keys.

    Raises:
        DomainValidationError: If the payload is not a valid map
    """
    if not isinstance(entries, dict):
        raise DomainValidationError("Settings must be an object of key/value pairs")
    for key in entries:
        if not isinstance(key, str) or not key.strip():
            raise DomainValidationError("Setting keys must be non-empty strings")
    return dict(entries)


def client_config(stored: Dict[str, Any]) -> Dict[str, Any]:
    """
    Configuration delivered to client installations.

    Stored remote config entries override the defaults; keys without a
    default are passed through unchanged.
    """
    config = dict(DEFAULT_CLIENT_CONFIG, features={})
    config.update(stored)
    config["maintenance_mode"] = bool(config.get("maintenance_mode"))
    if not isinstance(config.get("features"), dict):
        config["features"] = {}
    return config
