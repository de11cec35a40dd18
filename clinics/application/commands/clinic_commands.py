"""
Clinic commands.

Commands for registration, admin review and controls.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from audit.domain.audit_log import Actor
from clinics.domain.controls import ControlsUpdate


@dataclass
class RegisterClinicCommand:
    """Self-registration of a clinic and its administrator."""

    name: str
    email: str
    password: str
    hwid: str
    doctor_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    system_version: Optional[str] = None
    actor: Optional[Actor] = None


@dataclass
class ApproveClinicCommand:
    """Approve a clinic, optionally under an explicit plan."""

    clinic_id: uuid.UUID
    plan_id: Optional[uuid.UUID] = None
    actor: Optional[Actor] = None


@dataclass
class RejectClinicCommand:
    """Reject a pending clinic."""

    clinic_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class ToggleClinicStatusCommand:
    """Suspend an approved clinic or reinstate a suspended one."""

    clinic_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class DeleteClinicCommand:
    """Delete a clinic with its license and users."""

    clinic_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class UpdateClinicControlsCommand:
    """Partial update of a clinic's quotas, features and lock."""

    clinic_id: uuid.UUID
    update: ControlsUpdate
    actor: Optional[Actor] = None
