"""
Django implementation of CurrencyRepository port.
"""
from decimal import Decimal
from typing import Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.utils import timezone

from core.domain.exceptions import DuplicateError
from core.infrastructure.database import atomic_sync_to_async
from plans.domain.currency import BASE_CURRENCY, Currency
from plans.infrastructure.models import Currency as CurrencyModel
from plans.ports.currency_repository import CurrencyRepository


class DjangoCurrencyRepository(CurrencyRepository):
    """Django ORM implementation of CurrencyRepository."""

    def _to_domain(self, model: CurrencyModel) -> Currency:
        return Currency(
            code=model.code,
            rate=Decimal(model.rate),
            symbol=model.symbol,
            last_updated=model.last_updated,
        )

    @sync_to_async
    def list_all(self) -> List[Currency]:
        return [self._to_domain(model) for model in CurrencyModel.objects.order_by("code")]

    @sync_to_async
    def find_by_code(self, code: str) -> Optional[Currency]:
        model = CurrencyModel.objects.filter(code=code.upper()).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def add(self, currency: Currency) -> Currency:
        """
        Insert a new currency.

        Raises:
            DuplicateError: If the code already exists
        """
        if CurrencyModel.objects.filter(code=currency.code).exists():
            raise DuplicateError(f"Currency {currency.code} already exists", code="DUPLICATE_CURRENCY")
        try:
            with transaction.atomic():
                model = CurrencyModel.objects.create(
                    code=currency.code,
                    rate=currency.rate,
                    symbol=currency.symbol,
                    last_updated=currency.last_updated,
                )
        except IntegrityError as e:
            raise DuplicateError(f"Currency {currency.code} already exists", code="DUPLICATE_CURRENCY") from e
        return self._to_domain(model)

    @sync_to_async
    def save(self, currency: Currency) -> Currency:
        CurrencyModel.objects.filter(code=currency.code).update(
            rate=currency.rate,
            symbol=currency.symbol,
            last_updated=currency.last_updated,
        )
        return currency

    @sync_to_async
    def delete(self, code: str) -> bool:
        deleted, _ = CurrencyModel.objects.filter(code=code.upper()).delete()
        return deleted > 0

    @atomic_sync_to_async
    def update_rates(self, rates: Dict[str, Decimal]) -> int:
        """
        Apply fetched rates to the stored non-USD currencies.

        Args:
            rates: Units per USD keyed by currency code

        Returns:
            Number of currencies updated
        """
        updated = 0
        now = timezone.now()
        for model in CurrencyModel.objects.select_for_update().exclude(code=BASE_CURRENCY):
            rate = rates.get(model.code)
            if rate is None or Decimal(rate) <= 0:
                continue
            model.rate = Decimal(str(rate))
            model.last_updated = now
            model.save(update_fields=["rate", "last_updated"])
            updated += 1
        return updated
