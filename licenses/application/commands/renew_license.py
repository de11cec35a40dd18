"""
RenewLicenseCommand.

Command to extend a license by a number of months.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from audit.domain.audit_log import Actor


@dataclass
class RenewLicenseCommand:
    """Command to renew a license."""

    license_id: uuid.UUID
    months: int
    actor: Optional[Actor] = None
