"""
Plan commands.
"""
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from audit.domain.audit_log import Actor
from plans.domain.plan import PlanPrice


@dataclass
class CreatePlanCommand:
    """Command to create a plan."""

    name: str
    duration_months: int = 12
    device_limit: int = 1
    prices: List[PlanPrice] = field(default_factory=list)
    features: Optional[Dict[str, bool]] = None
    limits: Optional[Dict[str, float]] = None
    is_active: bool = True
    price_usd: Optional[Decimal] = None
    actor: Optional[Actor] = None


@dataclass
class UpdatePlanCommand:
    """Command to replace every editable field of a plan."""

    plan_id: uuid.UUID
    name: str
    duration_months: int = 12
    device_limit: int = 1
    prices: List[PlanPrice] = field(default_factory=list)
    features: Optional[Dict[str, bool]] = None
    limits: Optional[Dict[str, float]] = None
    is_active: bool = True
    price_usd: Optional[Decimal] = None
    actor: Optional[Actor] = None


@dataclass
class DeletePlanCommand:
    """Command to delete a plan."""

    plan_id: uuid.UUID
    actor: Optional[Actor] = None


@dataclass
class SetPlanActiveCommand:
    """Command to activate or deactivate a plan."""

    plan_id: uuid.UUID
    is_active: bool
    actor: Optional[Actor] = None
