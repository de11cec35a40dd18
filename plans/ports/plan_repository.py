"""
Plan repository port (interface).

This defines the contract for plan persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
import uuid

from plans.domain.plan import Plan


class PlanRepository(ABC):
    """
    Abstract repository for Plan entities (with their prices).
    """

    @abstractmethod
    async def save(self, plan: Plan) -> Plan:
        """
        Save a plan and replace its prices atomically.

        Args:
            plan: Plan entity to save

        Returns:
            Saved plan entity
        """

    @abstractmethod
    async def find_by_id(self, plan_id: uuid.UUID) -> Optional[Plan]:
        """
        Find a plan by ID.

        Args:
            plan_id: Plan UUID

        Returns:
            Plan entity or None if not found
        """

    @abstractmethod
    async def list_all(self, active_only: bool = False) -> List[Plan]:
        """
        List plans, newest first.

        Args:
            active_only: Only return plans flagged active

        Returns:
            List of Plan entities
        """

    @abstractmethod
    async def first_active(self) -> Optional[Plan]:
        """
        Return the earliest-created active plan.

        Returns:
            Plan entity or None if no plan is active
        """

    @abstractmethod
    async def delete(self, plan_id: uuid.UUID) -> bool:
        """
        Delete a plan.

        Args:
            plan_id: Plan UUID

        Returns:
            True if a plan was deleted
        """
