"""
Clinic controls: per-tenant quotas, feature flags and the admin lock.

Every admin write is summarised by ``describe_changes`` into one audit
line listing exactly which fields changed, followed by the full before
and after snapshots.
"""
import json
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from core.domain.exceptions import DomainValidationError

DEFAULT_STORAGE_LIMIT_MB = 1024
DEFAULT_USERS_LIMIT = 3
FEATURE_KEYS = ("patients", "appointments", "orthodontics", "xray", "ai")
DEFAULT_FEATURES = {
    "patients": True,
    "appointments": True,
    "orthodontics": False,
    "xray": False,
    "ai": False,
}

# Marks a field left out of a partial update, as distinct from an explicit null.
UNSET: Any = object()


@dataclass
class ControlsUpdate:
    """
    Partial update of a clinic's controls.

    Fields left as UNSET keep their stored value. ``features`` is merged
    key by key into the stored flags.
    """

    storage_limit_mb: Any = UNSET
    users_limit: Any = UNSET
    patients_limit: Any = UNSET
    features: Dict[str, bool] = field(default_factory=dict)
    locked: Any = UNSET
    lock_reason: Any = UNSET

    def __post_init__(self):
        """Validate the supplied fields."""
        for name in ("storage_limit_mb", "users_limit"):
            value = getattr(self, name)
            if value is not UNSET and not _positive_int(value):
                raise DomainValidationError(f"{_wire_name(name)} must be a positive integer")
        if self.patients_limit is not UNSET and self.patients_limit is not None and not _positive_int(
            self.patients_limit
        ):
            raise DomainValidationError("patientsLimit must be a positive integer or null")
        unknown = sorted(set(self.features) - set(FEATURE_KEYS))
        if unknown:
            raise DomainValidationError(f"Unknown features: {', '.join(unknown)}")
        for key, value in self.features.items():
            if not isinstance(value, bool):
                raise DomainValidationError(f"features.{key} must be a boolean")
        if self.locked is not UNSET and not isinstance(self.locked, bool):
            raise DomainValidationError("locked must be a boolean")
        if self.lock_reason is not UNSET and self.lock_reason is not None and not isinstance(self.lock_reason, str):
            raise DomainValidationError("lockReason must be a string or null")


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _wire_name(name: str) -> str:
    return {"storage_limit_mb": "storageLimitMB", "users_limit": "usersLimit"}.get(name, name)


@dataclass(frozen=True)
class ClinicControl:
    """
    Quotas, feature flags and lock state of one clinic.

    ``patients_limit`` of None means unlimited. A locked control always
    carries a non-empty ``lock_reason``.
    """

    clinic_id: uuid.UUID
    storage_limit_mb: int = DEFAULT_STORAGE_LIMIT_MB
    users_limit: int = DEFAULT_USERS_LIMIT
    patients_limit: Optional[int] = None
    features: Dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_FEATURES))
    locked: bool = False
    lock_reason: Optional[str] = None

    @classmethod
    def defaults(cls, clinic_id: uuid.UUID) -> "ClinicControl":
        """Controls given to a clinic that has none yet."""
        return cls(clinic_id=clinic_id)

    def apply(self, update: ControlsUpdate) -> "ClinicControl":
        """
        Return a copy with a partial update applied.

        Locking requires a non-empty reason; unlocking clears it.

        Raises:
            DomainValidationError: If locking without a reason
        """
        changes: Dict[str, Any] = {}
        for name in ("storage_limit_mb", "users_limit", "patients_limit"):
            value = getattr(update, name)
            if value is not UNSET:
                changes[name] = value
        if update.features:
            changes["features"] = {**self.features, **update.features}

        locked = self.locked if update.locked is UNSET else update.locked
        lock_reason = self.lock_reason if update.lock_reason is UNSET else update.lock_reason
        if locked:
            lock_reason = (lock_reason or "").strip()
            if not lock_reason:
                raise DomainValidationError("lockReason is required when locking a clinic")
        else:
            lock_reason = None
        changes["locked"] = locked
        changes["lock_reason"] = lock_reason

        return replace(self, **changes)

    def snapshot(self) -> Dict[str, Any]:
        """Wire representation of the controls."""
        return {
            "storageLimitMB": self.storage_limit_mb,
            "usersLimit": self.users_limit,
            "patientsLimit": self.patients_limit,
            "features": {key: self.features.get(key, False) for key in FEATURE_KEYS},
            "locked": self.locked,
            "lockReason": self.lock_reason,
        }


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _compact_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def diff_controls(before: ClinicControl, after: ClinicControl) -> List[str]:
    """
    List the changes between two control states, one entry per field.

    Returns:
        Entries such as ``storage: 1024MB → 2048MB``
    """
    changes = []
    if before.storage_limit_mb != after.storage_limit_mb:
        changes.append(f"storage: {before.storage_limit_mb}MB → {after.storage_limit_mb}MB")
    if before.users_limit != after.users_limit:
        changes.append(f"users: {before.users_limit} → {after.users_limit}")
    if before.patients_limit != after.patients_limit:
        changes.append(f"patients: {_text(before.patients_limit)} → {_text(after.patients_limit)}")
    if before.locked != after.locked:
        changes.append(f"locked: {_text(before.locked)} → {_text(after.locked)}")
    if before.lock_reason != after.lock_reason:
        changes.append(f'lockReason: "{before.lock_reason or "none"}" → "{after.lock_reason or "none"}"')

    flags = []
    for key in FEATURE_KEYS:
        old, new = before.features.get(key), after.features.get(key)
        if old != new:
            flags.append(f"{key}: {_text(old)} → {_text(new)}")
    if flags:
        changes.append(f"features: {', '.join(flags)}")
    return changes


def describe_changes(clinic_name: str, before: ClinicControl, after: ClinicControl) -> str:
    """
    Build the audit line for a controls update.

    Args:
        clinic_name: Name of the clinic
        before: Controls before the write
        after: Controls after the write

    Returns:
        ``Updated controls for clinic {name}: {changes}. Before: {json}. After: {json}``
    """
    changes = diff_controls(before, after)
    summary = "; ".join(changes) if changes else "No changes"
    return (
        f"Updated controls for clinic {clinic_name}: {summary}. "
        f"Before: {_compact_json(before.snapshot())}. After: {_compact_json(after.snapshot())}"
    )
