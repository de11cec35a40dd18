"""
Release and configuration commands.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from audit.domain.audit_log import Actor


@dataclass
class PublishVersionCommand:
    """Publish a new client version."""

    version: str
    download_url: str
    release_notes: str = ""
    force_update: bool = False
    is_active: bool = True
    actor: Optional[Actor] = None


@dataclass
class UpdateVersionCommand:
    """Partial update of a version; None leaves a field unchanged."""

    version_id: uuid.UUID
    version: Optional[str] = None
    download_url: Optional[str] = None
    release_notes: Optional[str] = None
    force_update: Optional[bool] = None
    is_active: Optional[bool] = None
    actor: Optional[Actor] = None


@dataclass
class DeleteVersionCommand:
    """Delete a version."""

    version_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class UpdateSettingsCommand:
    """Upsert key/value entries of the system settings or remote config."""

    entries: Dict[str, Any] = field(default_factory=dict)
    actor: Optional[Actor] = None
