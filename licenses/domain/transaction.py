"""
Transaction domain entity.

A money movement recorded when a license is sold or renewed.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.domain.dates import utcnow
from core.domain.value_objects import Money, TransactionStatus, TransactionType


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: uuid.UUID
    license_id: Optional[uuid.UUID]
    customer_name: str
    plan_name: str
    amount: Decimal
    currency: str
    type: TransactionType
    status: TransactionStatus
    date: datetime

    @classmethod
    def record(
        cls,
        license_id: uuid.UUID,
        customer_name: str,
        plan_name: str,
        price: Money,
        transaction_type: TransactionType,
        now: Optional[datetime] = None,
    ) -> "Transaction":
        """
        Create a completed transaction.

        Args:
            license_id: License the money relates to
            customer_name: Customer name at the time of sale
            plan_name: Plan name at the time of sale
            price: Amount and currency
            transaction_type: Purchase or renewal
            now: Transaction time (defaults to utcnow)

        Returns:
            Transaction entity instance
        """
        return cls(
            id=uuid.uuid4(),
            license_id=license_id,
            customer_name=customer_name,
            plan_name=plan_name,
            amount=price.amount,
            currency=price.currency,
            type=transaction_type,
            status=TransactionStatus.COMPLETED,
            date=now or utcnow(),
        )
