"""
Django implementation of AppVersionRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async

from releases.domain.app_version import AppVersion
from releases.infrastructure.models import AppVersion as AppVersionModel
from releases.ports.app_version_repository import AppVersionRepository


class DjangoAppVersionRepository(AppVersionRepository):
    """Django ORM implementation of AppVersionRepository."""

    def _to_domain(self, model: AppVersionModel) -> AppVersion:
        return AppVersion(
            id=model.id,
            version=model.version,
            download_url=model.download_url,
            release_date=model.release_date,
            release_notes=model.release_notes,
            force_update=model.force_update,
            is_active=model.is_active,
        )

    def _fields(self, version: AppVersion) -> dict:
        return {
            "version": version.version,
            "download_url": version.download_url,
            "release_notes": version.release_notes,
            "force_update": version.force_update,
            "is_active": version.is_active,
            "release_date": version.release_date,
        }

    @sync_to_async
    def add(self, version: AppVersion) -> AppVersion:
        return self._to_domain(AppVersionModel.objects.create(id=version.id, **self._fields(version)))

    @sync_to_async
    def save(self, version: AppVersion) -> AppVersion:
        AppVersionModel.objects.filter(id=version.id).update(**self._fields(version))
        return version

    @sync_to_async
    def find_by_id(self, version_id: uuid.UUID) -> Optional[AppVersion]:
        model = AppVersionModel.objects.filter(id=version_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_all(self) -> List[AppVersion]:
        return [self._to_domain(model) for model in AppVersionModel.objects.order_by("-release_date")]

    @sync_to_async
    def latest_active(self) -> Optional[AppVersion]:
        model = AppVersionModel.objects.filter(is_active=True).order_by("-release_date").first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def delete(self, version_id: uuid.UUID) -> bool:
        deleted, _ = AppVersionModel.objects.filter(id=version_id).delete()
        return deleted > 0
