"""
Dashboard analytics handlers.

Money figures are normalised to USD with the configured currency rates.
"""
from typing import List

from core.domain.dates import days_from, utcnow
from core.domain.value_objects import LicenseStatus
from licenses.application.dto.license_dto import DashboardStatsDTO, FinancialStatsDTO, RevenuePointDTO
from licenses.domain.services import RevenueCalculator
from licenses.domain.transaction import Transaction
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.transaction_repository import TransactionRepository
from plans.domain.currency import RateTable
from plans.ports.currency_repository import CurrencyRepository
from support.ports.ticket_repository import TicketRepository

EXPIRING_SOON_DAYS = 30
RECENT_TRANSACTIONS = 50


async def _calculator(currency_repository: CurrencyRepository) -> RevenueCalculator:
    return RevenueCalculator(RateTable(await currency_repository.list_all()))


class GetDashboardStatsHandler:
    """Headline counters for the dashboard."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        transaction_repository: TransactionRepository,
        currency_repository: CurrencyRepository,
        ticket_repository: TicketRepository,
    ):
        self.license_repository = license_repository
        self.transaction_repository = transaction_repository
        self.currency_repository = currency_repository
        self.ticket_repository = ticket_repository

    async def handle(self) -> DashboardStatsDTO:
        now = utcnow()
        calculator = await _calculator(self.currency_repository)
        transactions = await self.transaction_repository.list_completed()

        return DashboardStatsDTO(
            active_licenses=await self.license_repository.count_by_status(LicenseStatus.ACTIVE),
            expired_licenses=await self.license_repository.count_by_status(LicenseStatus.EXPIRED),
            total_revenue_usd=calculator.total(transactions),
            total_customers=await self.license_repository.count_customers(),
            expiring_soon_count=await self.license_repository.count_expiring(
                now, days_from(now, EXPIRING_SOON_DAYS)
            ),
            open_tickets=await self.ticket_repository.count_open(),
        )


class ListRecentTransactionsHandler:
    """Latest transactions, newest first."""

    def __init__(self, transaction_repository: TransactionRepository):
        self.transaction_repository = transaction_repository

    async def handle(self, limit: int = RECENT_TRANSACTIONS) -> List[Transaction]:
        return await self.transaction_repository.list_recent(limit=limit)


class GetFinancialStatsHandler:
    """Total, today's and this month's revenue."""

    def __init__(self, transaction_repository: TransactionRepository, currency_repository: CurrencyRepository):
        self.transaction_repository = transaction_repository
        self.currency_repository = currency_repository

    async def handle(self) -> FinancialStatsDTO:
        calculator = await _calculator(self.currency_repository)
        transactions = await self.transaction_repository.list_completed()
        return FinancialStatsDTO(**calculator.financial_summary(transactions, utcnow()))


class GetRevenueHistoryHandler:
    """Revenue per month over the last twelve calendar months."""

    def __init__(self, transaction_repository: TransactionRepository, currency_repository: CurrencyRepository):
        self.transaction_repository = transaction_repository
        self.currency_repository = currency_repository

    async def handle(self, months: int = 12) -> List[RevenuePointDTO]:
        calculator = await _calculator(self.currency_repository)
        transactions = await self.transaction_repository.list_completed()
        return [
            RevenuePointDTO(name=point["name"], revenue=point["revenue"])
            for point in calculator.monthly_history(transactions, utcnow(), months=months)
        ]
