"""
Django implementation of PlanRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from decimal import Decimal
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db.models import ProtectedError

from core.domain.exceptions import StateConflictError
from core.infrastructure.database import atomic_sync_to_async
from plans.domain.plan import Plan, PlanPrice
from plans.infrastructure.models import Plan as PlanModel
from plans.infrastructure.models import PlanPrice as PlanPriceModel
from plans.ports.plan_repository import PlanRepository


def _decimal_or_none(value) -> Optional[Decimal]:
    return Decimal(value) if value is not None else None


class DjangoPlanRepository(PlanRepository):
    """
    Django ORM implementation of PlanRepository.

    Prices are stored in their own table and always replaced as a whole.
    """

    def _to_domain(self, model: PlanModel) -> Plan:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Plan model (prices prefetched when possible)

        Returns:
            Plan domain entity
        """
        prices = [
            PlanPrice(
                currency=price.currency,
                monthly_price=_decimal_or_none(price.monthly_price),
                period_price=_decimal_or_none(price.period_price),
                yearly_price=_decimal_or_none(price.yearly_price),
                discount=_decimal_or_none(price.discount),
                is_primary=price.is_primary,
            )
            for price in model.prices.all()
        ]
        return Plan(
            id=model.id,
            name=model.name,
            duration_months=model.duration_months,
            device_limit=model.device_limit,
            features=model.features or {},
            limits=model.limits or {},
            is_active=model.is_active,
            price_usd=Decimal(model.price_usd),
            price_monthly=Decimal(model.price_monthly),
            price_yearly=Decimal(model.price_yearly),
            currency=model.currency,
            prices=prices,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, plan: Plan) -> PlanModel:
        """
        Convert domain entity to Django model.

        Args:
            plan: Plan domain entity

        Returns:
            Django Plan model (unsaved changes applied)
        """
        values = {
            "name": plan.name,
            "price_usd": plan.price_usd,
            "price_monthly": plan.price_monthly,
            "price_yearly": plan.price_yearly,
            "currency": plan.currency,
            "duration_months": plan.duration_months,
            "device_limit": plan.device_limit,
            "features": plan.features,
            "limits": plan.limits,
            "is_active": plan.is_active,
        }
        model, created = PlanModel.objects.get_or_create(id=plan.id, defaults=values)
        if not created:
            for attr, value in values.items():
                setattr(model, attr, value)
        return model

    @atomic_sync_to_async
    def save(self, plan: Plan) -> Plan:
        """
        Save a plan and replace its prices in one transaction.

        Args:
            plan: Plan entity to save

        Returns:
            Saved plan entity
        """
        model = self._to_model(plan)
        model.save()
        PlanPriceModel.objects.filter(plan=model).delete()
        PlanPriceModel.objects.bulk_create(
            [
                PlanPriceModel(
                    plan=model,
                    currency=price.currency,
                    monthly_price=price.monthly_price,
                    period_price=price.period_price,
                    yearly_price=price.yearly_price,
                    discount=price.discount,
                    is_primary=price.is_primary,
                )
                for price in plan.prices
            ]
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, plan_id: uuid.UUID) -> Optional[Plan]:
        """
        Find a plan by ID.

        Args:
            plan_id: Plan UUID

        Returns:
            Plan entity or None if not found
        """
        model = PlanModel.objects.prefetch_related("prices").filter(id=plan_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_all(self, active_only: bool = False) -> List[Plan]:
        """
        List plans, newest first.

        Args:
            active_only: Only return active plans

        Returns:
            List of Plan entities
        """
        queryset = PlanModel.objects.prefetch_related("prices").order_by("-created_at")
        if active_only:
            queryset = queryset.filter(is_active=True)
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def first_active(self) -> Optional[Plan]:
        """
        Return the earliest-created active plan.

        Returns:
            Plan entity or None
        """
        model = (
            PlanModel.objects.prefetch_related("prices")
            .filter(is_active=True)
            .order_by("created_at", "id")
            .first()
        )
        return self._to_domain(model) if model else None

    @sync_to_async
    def delete(self, plan_id: uuid.UUID) -> bool:
        """
        Delete a plan (its prices cascade).

        Args:
            plan_id: Plan UUID

        Returns:
            True if a plan was deleted

        Raises:
            StateConflictError: If licenses were issued under the plan
        """
        try:
            deleted, _ = PlanModel.objects.filter(id=plan_id).delete()
        except ProtectedError as e:
            raise StateConflictError(
                "Plan has issued licenses and cannot be deleted; deactivate it instead",
                code="PLAN_IN_USE",
            ) from e
        return deleted > 0
