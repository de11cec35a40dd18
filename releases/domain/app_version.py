"""
AppVersion domain entity and the update check.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError


def _check_url(url: Optional[str]) -> str:
    if not url or not url.strip().lower().startswith(("http://", "https://")):
        raise DomainValidationError("downloadUrl must be a valid URL")
    return url.strip()


@dataclass(frozen=True)
class AppVersion:
    """A published build of the client software."""

    id: uuid.UUID
    version: str
    download_url: str
    release_date: datetime
    release_notes: str = ""
    force_update: bool = False
    is_active: bool = True

    @classmethod
    def publish(
        cls,
        version: str,
        download_url: str,
        release_notes: str = "",
        force_update: bool = False,
        is_active: bool = True,
    ) -> "AppVersion":
        """
        Create a new version entry released now.

        Raises:
            DomainValidationError: If version is empty or the URL is invalid
        """
        if not version or not version.strip():
            raise DomainValidationError("version is required")
        return cls(
            id=uuid.uuid4(),
            version=version.strip(),
            download_url=_check_url(download_url),
            release_date=utcnow(),
            release_notes=release_notes or "",
            force_update=bool(force_update),
            is_active=bool(is_active),
        )

    def with_changes(
        self,
        version: Optional[str] = None,
        download_url: Optional[str] = None,
        release_notes: Optional[str] = None,
        force_update: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> "AppVersion":
        """Return a copy with the given fields replaced; None keeps a field."""
        changes = {}
        if version is not None:
            if not version.strip():
                raise DomainValidationError("version is required")
            changes["version"] = version.strip()
        if download_url is not None:
            changes["download_url"] = _check_url(download_url)
        if release_notes is not None:
            changes["release_notes"] = release_notes
        if force_update is not None:
            changes["force_update"] = force_update
        if is_active is not None:
            changes["is_active"] = is_active
        return replace(self, **changes)


@dataclass(frozen=True)
class UpdateCheck:
    """Answer to a client asking whether it should update."""

    has_update: bool
    version: Optional[str] = None
    download_url: Optional[str] = None
    release_notes: Optional[str] = None
    force_update: bool = False

    @classmethod
    def against(cls, latest: Optional[AppVersion], current_version: Optional[str]) -> "UpdateCheck":
        """
        Compare the client's version with the newest active release.

        Any difference counts as an update; a client that sends no
        version is always told to update. ``force_update`` is only
        reported together with an update.
        """
        if latest is None:
            return cls(has_update=False)
        current = (current_version or "").strip()
        has_update = not current or current != latest.version
        return cls(
            has_update=has_update,
            version=latest.version,
            download_url=latest.download_url,
            release_notes=latest.release_notes,
            force_update=latest.force_update and has_update,
        )
