"""
Django implementation of SettingsRepository port.
"""
from typing import Any, Dict

from asgiref.sync import sync_to_async

from core.infrastructure.database import atomic_sync_to_async
from releases.infrastructure.models import RemoteConfig, SystemSetting
from releases.ports.settings_repository import SettingsRepository


class DjangoSettingsRepository(SettingsRepository):
    """Django ORM implementation of SettingsRepository."""

    @staticmethod
    def _as_map(model_class) -> Dict[str, Any]:
        return dict(model_class.objects.values_list("key", "value"))

    @staticmethod
    def _upsert(model_class, entries: Dict[str, Any]) -> None:
        for key, value in entries.items():
            model_class.objects.update_or_create(key=key, defaults={"value": value})

    @sync_to_async
    def system_settings(self) -> Dict[str, Any]:
        return self._as_map(SystemSetting)

    @atomic_sync_to_async
    def upsert_system_settings(self, entries: Dict[str, Any]) -> None:
        self._upsert(SystemSetting, entries)

    @sync_to_async
    def remote_config(self) -> Dict[str, Any]:
        return self._as_map(RemoteConfig)

    @atomic_sync_to_async
    def upsert_remote_config(self, entries: Dict[str, Any]) -> None:
        self._upsert(RemoteConfig, entries)
