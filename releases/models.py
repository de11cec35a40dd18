"""
Releases app models.
"""
from releases.infrastructure.models import AppVersion, RemoteConfig, SystemSetting  # noqa: F401
