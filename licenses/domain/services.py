"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Optional

from core.domain.dates import add_months, start_of_day, start_of_month, utcnow
from core.domain.value_objects import LicenseStatus, Money, ProductType, TransactionStatus
from licenses.domain.license import License
from licenses.domain.serial import SerialGenerator
from licenses.domain.transaction import Transaction
from plans.domain.currency import RateTable
from plans.domain.plan import Plan

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


class LicenseIssuer:
    """
    Domain service producing licenses with fresh serials.

    Callers try each candidate until the store accepts its serial.
    """

    MAX_ATTEMPTS = 5

    @classmethod
    def candidates(
        cls,
        plan: Plan,
        customer_name: str,
        product_type: ProductType = ProductType.POS,
        status: LicenseStatus = LicenseStatus.PENDING,
        now: Optional[datetime] = None,
    ) -> Iterator[License]:
        """
        Yield up to MAX_ATTEMPTS licenses, each with a new serial.

        Args:
            plan: Plan the license is issued under
            customer_name: Customer or clinic name
            product_type: Product line
            status: Initial status
            now: Issue time (defaults to utcnow)
        """
        now = now or utcnow()
        for _ in range(cls.MAX_ATTEMPTS):
            yield License.issue(
                serial=SerialGenerator.generate(plan, now),
                plan_id=plan.id,
                duration_months=plan.duration_months,
                device_limit=plan.device_limit,
                customer_name=customer_name,
                product_type=product_type,
                status=status,
                now=now,
            )


class LicensePricing:
    """Domain service for license prices."""

    @staticmethod
    def purchase_price(plan: Plan) -> Money:
        """
        Price of a newly generated license: the plan's full-period price.
        """
        return plan.base_price()

    @staticmethod
    def renewal_price(plan: Plan, months: int) -> Money:
        """
        Price of extending a license by some months.

        Linear pro-rating of the plan's base price:
        ``base / duration_months * months``, rounded to cents.

        Args:
            plan: Plan the license was issued under
            months: Number of months added

        Returns:
            Money in the base price currency
        """
        base = plan.base_price()
        amount = base.amount / Decimal(plan.duration_months) * Decimal(months)
        return Money(amount, base.currency)


class RevenueCalculator:
    """
    Revenue figures over completed transactions, normalised to USD.
    """

    def __init__(self, rates: RateTable):
        self.rates = rates

    def _completed(self, transactions: Iterable[Transaction]) -> List[Transaction]:
        return [t for t in transactions if t.status == TransactionStatus.COMPLETED]

    def total(self, transactions: Iterable[Transaction], since: datetime = None) -> Decimal:
        """
        Sum of completed transactions in USD.

        Args:
            transactions: Transactions to sum
            since: Only count transactions at or after this time

        Returns:
            USD amount rounded to cents
        """
        total = Decimal("0")
        for transaction in self._completed(transactions):
            if since is not None and transaction.date < since:
                continue
            total += self.rates.to_usd(transaction.amount, transaction.currency)
        return Money(total, "USD").amount

    def financial_summary(self, transactions: Iterable[Transaction], now: datetime) -> Dict[str, Decimal]:
        """Total, today's and this month's revenue in USD."""
        transactions = list(transactions)
        return {
            "total_revenue": self.total(transactions),
            "daily_revenue": self.total(transactions, since=start_of_day(now)),
            "monthly_revenue": self.total(transactions, since=start_of_month(now)),
        }

    def monthly_history(self, transactions: Iterable[Transaction], now: datetime, months: int = 12) -> List[Dict]:
        """
        Revenue per calendar month for the last ``months`` months.

        Returns:
            Oldest-first list of ``{"name": "Jan", "revenue": Decimal}``
        """
        current = start_of_month(now)
        buckets = []
        for offset in range(months - 1, -1, -1):
            start = add_months(current, -offset)
            buckets.append({"start": start, "end": add_months(start, 1), "revenue": Decimal("0")})

        for transaction in self._completed(transactions):
            for bucket in buckets:
                if bucket["start"] <= transaction.date < bucket["end"]:
                    bucket["revenue"] += self.rates.to_usd(transaction.amount, transaction.currency)
                    break

        return [
            {"name": MONTH_NAMES[bucket["start"].month - 1], "revenue": Money(bucket["revenue"], "USD").amount}
            for bucket in buckets
        ]
