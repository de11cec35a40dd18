"""
Plan and currency DTOs for API responses.
"""
from dataclasses import dataclass
from typing import List

from plans.domain.plan import Plan, PlanPrice


@dataclass
class PlanCatalogEntryDTO:
    """An active plan with a price row for every configured currency."""

    plan: Plan
    prices: List[PlanPrice]


@dataclass
class RateSyncResultDTO:
    """Outcome of a rate sync."""

    updated: int
    source: str
