"""
Django implementation of TransactionRepository port.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import TransactionStatus, TransactionType
from licenses.domain.transaction import Transaction
from licenses.infrastructure.models import Transaction as TransactionModel
from licenses.ports.transaction_repository import TransactionRepository


class DjangoTransactionRepository(TransactionRepository):
    """Django ORM implementation of TransactionRepository."""

    def _to_domain(self, model: TransactionModel) -> Transaction:
        return Transaction(
            id=model.id,
            license_id=model.license_id,
            customer_name=model.customer_name,
            plan_name=model.plan_name,
            amount=Decimal(model.amount),
            currency=model.currency,
            type=TransactionType(model.type),
            status=TransactionStatus(model.status),
            date=model.date,
        )

    def add_sync(self, transaction: Transaction) -> Transaction:
        """Insert a transaction from synchronous code."""
        TransactionModel.objects.create(
            id=transaction.id,
            license_id=transaction.license_id,
            customer_name=transaction.customer_name,
            plan_name=transaction.plan_name,
            amount=transaction.amount,
            currency=transaction.currency,
            type=transaction.type.value,
            status=transaction.status.value,
            date=transaction.date,
        )
        return transaction

    async def add(self, transaction: Transaction) -> Transaction:
        return await sync_to_async(self.add_sync)(transaction)

    @sync_to_async
    def list_recent(self, limit: int = 50) -> List[Transaction]:
        return [self._to_domain(model) for model in TransactionModel.objects.order_by("-date")[:limit]]

    @sync_to_async
    def list_completed(self, since: Optional[datetime] = None) -> List[Transaction]:
        queryset = TransactionModel.objects.filter(status=TransactionStatus.COMPLETED.value)
        if since is not None:
            queryset = queryset.filter(date__gte=since)
        return [self._to_domain(model) for model in queryset.order_by("date")]
