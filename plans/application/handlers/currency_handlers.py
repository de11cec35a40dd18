"""
Currency handlers.
"""
from typing import List

from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import AuditAction
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import CurrencyNotFoundError
from plans.application.commands.currency_commands import (
    AddCurrencyCommand,
    DeleteCurrencyCommand,
    SyncCurrencyRatesCommand,
    UpdateCurrencyCommand,
)
from plans.application.dto.plan_dto import RateSyncResultDTO
from plans.application.services.exchange_rate_service import ExchangeRateService
from plans.domain.currency import Currency
from plans.ports.currency_repository import CurrencyRepository


class ListCurrenciesHandler:
    """Return every configured currency."""

    def __init__(self, currency_repository: CurrencyRepository):
        self.currency_repository = currency_repository

    async def handle(self) -> List[Currency]:
        return await self.currency_repository.list_all()


class AddCurrencyHandler:
    """Handler for AddCurrencyCommand."""

    def __init__(self, currency_repository: CurrencyRepository, audit_log_repository: AuditLogRepository):
        self.currency_repository = currency_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: AddCurrencyCommand) -> Currency:
        """
        Raises:
            DomainValidationError: If code, rate or symbol are invalid
            DuplicateError: If the code already exists
        """
        currency = Currency.create(code=command.code, rate=command.rate, symbol=command.symbol)
        saved = await self.currency_repository.add(currency)
        await self.audit.record(AuditAction.ADD_CURRENCY, f"Added {saved.code}", command.actor)
        return saved


class UpdateCurrencyHandler:
    """Handler for UpdateCurrencyCommand."""

    def __init__(self, currency_repository: CurrencyRepository, audit_log_repository: AuditLogRepository):
        self.currency_repository = currency_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: UpdateCurrencyCommand) -> Currency:
        """
        Raises:
            CurrencyNotFoundError: If the code is unknown
        """
        currency = await self.currency_repository.find_by_code(command.code)
        if not currency:
            raise CurrencyNotFoundError()
        saved = await self.currency_repository.save(
            currency.with_changes(rate=command.rate, symbol=command.symbol)
        )
        await self.audit.record(AuditAction.UPDATE_CURRENCY, f"Updated {saved.code}", command.actor)
        return saved


class DeleteCurrencyHandler:
    """Handler for DeleteCurrencyCommand."""

    def __init__(self, currency_repository: CurrencyRepository, audit_log_repository: AuditLogRepository):
        self.currency_repository = currency_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, command: DeleteCurrencyCommand) -> None:
        code = command.code.upper()
        if not await self.currency_repository.delete(code):
            raise CurrencyNotFoundError()
        await self.audit.record(AuditAction.DELETE_CURRENCY, f"Deleted {code}", command.actor)


class SyncCurrencyRatesHandler:
    """
    Handler for SyncCurrencyRatesCommand.

    Only currencies that already exist are updated; USD always stays 1.
    """

    def __init__(
        self,
        currency_repository: CurrencyRepository,
        audit_log_repository: AuditLogRepository,
        rate_service: ExchangeRateService = None,
    ):
        self.currency_repository = currency_repository
        self.audit = AuditTrail(audit_log_repository)
        self.rate_service = rate_service or ExchangeRateService()

    async def handle(self, command: SyncCurrencyRatesCommand) -> RateSyncResultDTO:
        snapshot = await self.rate_service.fetch()
        updated = await self.currency_repository.update_rates(snapshot.rates)
        origin = "from API" if snapshot.from_api else "simulated"
        await self.audit.record(
            AuditAction.SYNC_RATES,
            f"Synced {updated} currency rates ({origin})",
            command.actor,
        )
        return RateSyncResultDTO(updated=updated, source=snapshot.source)
