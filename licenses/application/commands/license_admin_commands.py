"""
Back-office license commands: edit, pause toggle, revoke, delete.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from audit.domain.audit_log import Actor
from core.domain.value_objects import LicenseStatus


@dataclass
class UpdateLicenseCommand:
    """Command to edit a license. None fields are left unchanged."""

    license_id: uuid.UUID
    customer_name: Optional[str] = None
    hardware_id: Optional[str] = None
    status: Optional[LicenseStatus] = None
    actor: Optional[Actor] = None


@dataclass
class ToggleLicensePauseCommand:
    """Command to pause an active license or resume a paused one."""

    license_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class RevokeLicenseCommand:
    """Command to revoke a license."""

    license_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license."""

    license_id: uuid.UUID
    actor: Optional[Actor] = None
