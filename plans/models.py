from plans.infrastructure.models import Currency, Plan, PlanPrice  # noqa: F401
