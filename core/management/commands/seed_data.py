"""
Django management command to seed development data.

Creates (idempotently):
- An admin and a developer user
- The USD and IQD currencies
- A free trial plan and a yearly standard plan
"""

import logging
from decimal import Decimal

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from accounts.infrastructure.models import User as UserModel
from plans.domain.plan import Plan, PlanPrice
from plans.infrastructure.models import Currency as CurrencyModel
from plans.infrastructure.models import Plan as PlanModel
from plans.infrastructure.repositories.django_plan_repository import DjangoPlanRepository

logger = logging.getLogger(__name__)

SEED_CURRENCIES = [
    ("USD", Decimal("1"), "$"),
    ("IQD", Decimal("1500"), "IQD"),
]


class Command(BaseCommand):
    """Command to seed development data."""

    help = "Create default users, currencies and plans"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--password",
            type=str,
            default="password",
            help="Password for the seeded users (default: password)",
        )
        parser.add_argument(
            "--skip-plans",
            action="store_true",
            help="Skip creating plans",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        password = options["password"]

        self._user("admin@sourceplus.com", "Admin User", "admin", password, superuser=True)
        self._user("ali@sourceplus.com", "Ali Developer", "developer", password)

        for code, rate, symbol in SEED_CURRENCIES:
            _, created = CurrencyModel.objects.get_or_create(code=code, defaults={"rate": rate, "symbol": symbol})
            if created:
                self.stdout.write(f"Created currency {code}")

        if not options["skip_plans"]:
            self._plans()

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("Seed data ready"))

    def _user(self, email, name, role, password, superuser=False):
        if UserModel.objects.filter(email=email).exists():
            self.stdout.write(f"User {email} already exists")
            return
        if superuser:
            UserModel.objects.create_superuser(email=email, password=password, name=name)
        else:
            UserModel.objects.create_user(email=email, password=password, name=name, role=role, status="APPROVED")
        self.stdout.write(f"Created {role} {email}")

    def _plans(self):
        if PlanModel.objects.exists():
            self.stdout.write("Plans already exist")
            return

        repository = DjangoPlanRepository()
        trial = Plan.create(
            name="Trial",
            duration_months=1,
            device_limit=1,
            features={"reports": True, "backup": False},
            limits={"products": 100},
        )
        standard = Plan.create(
            name="Standard",
            duration_months=12,
            device_limit=3,
            prices=[
                PlanPrice(currency="IQD", period_price=Decimal("300000"), is_primary=True),
                PlanPrice(currency="USD", period_price=Decimal("200")),
            ],
            features={"reports": True, "backup": True},
            limits={"products": 10000},
            price_usd=Decimal("200"),
        )
        for plan in (trial, standard):
            async_to_sync(repository.save)(plan)
            self.stdout.write(f"Created plan {plan.name}")
