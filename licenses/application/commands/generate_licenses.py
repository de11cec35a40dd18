"""
GenerateLicensesCommand.

Command to issue a batch of POS licenses under a plan.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from audit.domain.audit_log import Actor

MAX_BATCH_SIZE = 50


@dataclass
class GenerateLicensesCommand:
    """Command to generate pending licenses for a customer."""

    plan_id: uuid.UUID
    customer_name: str
    quantity: int = 1
    actor: Optional[Actor] = None
