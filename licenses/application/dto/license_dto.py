"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from licenses.domain.license import License
from plans.domain.plan import Plan


@dataclass
class PlanSummaryDTO:
    """Plan fields shown next to a license."""

    id: uuid.UUID
    name: str
    duration_months: int
    device_limit: int
    features: Dict[str, bool] = field(default_factory=dict)
    limits: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_plan(cls, plan: Optional[Plan]) -> Optional["PlanSummaryDTO"]:
        if plan is None:
            return None
        return cls(
            id=plan.id,
            name=plan.name,
            duration_months=plan.duration_months,
            device_limit=plan.device_limit,
            features=dict(plan.features),
            limits=dict(plan.limits),
        )


@dataclass
class LicenseDetailDTO:
    """A license together with its plan summary."""

    license: License
    plan: Optional[PlanSummaryDTO]


@dataclass
class ValidationResultDTO:
    """
    Result of validating a serial.

    Unknown serials produce ``found=False`` with every other field empty.
    """

    found: bool
    valid: bool
    status: Optional[str] = None
    is_paused: bool = False
    expire_date: Optional[datetime] = None
    days_left: int = 0
    license_id: Optional[uuid.UUID] = None
    plan: Optional[PlanSummaryDTO] = None

    @classmethod
    def not_found(cls) -> "ValidationResultDTO":
        return cls(found=False, valid=False)

    def to_cache(self) -> Dict[str, Any]:
        """Serialize to plain values for the cache."""
        return {
            "found": self.found,
            "valid": self.valid,
            "status": self.status,
            "is_paused": self.is_paused,
            "expire_date": self.expire_date.isoformat() if self.expire_date else None,
            "days_left": self.days_left,
            "license_id": str(self.license_id) if self.license_id else None,
            "plan": (
                {
                    "id": str(self.plan.id),
                    "name": self.plan.name,
                    "duration_months": self.plan.duration_months,
                    "device_limit": self.plan.device_limit,
                    "features": self.plan.features,
                    "limits": self.plan.limits,
                }
                if self.plan
                else None
            ),
        }

    @classmethod
    def from_cache(cls, data: Dict[str, Any]) -> "ValidationResultDTO":
        """Rebuild from the cached form."""
        plan = data.get("plan")
        return cls(
            found=data["found"],
            valid=data["valid"],
            status=data.get("status"),
            is_paused=data.get("is_paused", False),
            expire_date=datetime.fromisoformat(data["expire_date"]) if data.get("expire_date") else None,
            days_left=data.get("days_left", 0),
            license_id=uuid.UUID(data["license_id"]) if data.get("license_id") else None,
            plan=(
                PlanSummaryDTO(
                    id=uuid.UUID(plan["id"]),
                    name=plan["name"],
                    duration_months=plan["duration_months"],
                    device_limit=plan["device_limit"],
                    features=plan.get("features") or {},
                    limits=plan.get("limits") or {},
                )
                if plan
                else None
            ),
        )


@dataclass
class DashboardStatsDTO:
    """Headline numbers for the dashboard."""

    active_licenses: int
    expired_licenses: int
    total_revenue_usd: Decimal
    total_customers: int
    expiring_soon_count: int
    open_tickets: int


@dataclass
class FinancialStatsDTO:
    """Revenue totals in USD."""

    total_revenue: Decimal
    daily_revenue: Decimal
    monthly_revenue: Decimal


@dataclass
class RevenuePointDTO:
    """Revenue of one calendar month in USD."""

    name: str
    revenue: Decimal


@dataclass
class ExpirySweepResultDTO:
    """Outcome of an expiry sweep."""

    expired: List[str] = field(default_factory=list)
    sessions_revoked: int = 0
    dry_run: bool = False
