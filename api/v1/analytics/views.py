"""
Dashboard analytics API views.

All amounts are reported in USD.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import IsAuthenticatedUser
from api.v1.analytics.serializers import (
    DashboardStatsSerializer,
    FinancialStatsSerializer,
    RevenuePointSerializer,
    TransactionSerializer,
)
from core.instrumentation import get_tracer
from licenses.application.handlers.analytics_handlers import (
    GetDashboardStatsHandler,
    GetFinancialStatsHandler,
    GetRevenueHistoryHandler,
    ListRecentTransactionsHandler,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from plans.infrastructure.repositories.django_currency_repository import DjangoCurrencyRepository
from support.infrastructure.repositories.django_ticket_repository import DjangoTicketRepository

_license_repo = DjangoLicenseRepository()
_transaction_repo = DjangoTransactionRepository()
_currency_repo = DjangoCurrencyRepository()
_ticket_repo = DjangoTicketRepository()

tracer = get_tracer(__name__)


class DashboardStatsView(APIView):
    permission_classes = [IsAuthenticatedUser]

    @extend_schema(operation_id="dashboard_stats", summary="Dashboard stats", tags=["Analytics"], responses={200: DashboardStatsSerializer})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_stats)(request)

    async def _handle_stats(self, request: Request) -> Response:
        with tracer.start_as_current_span("dashboard_stats"):
            handler = GetDashboardStatsHandler(
                license_repository=_license_repo,
                transaction_repository=_transaction_repo,
                currency_repository=_currency_repo,
                ticket_repository=_ticket_repo,
            )
            return Response(DashboardStatsSerializer(await handler.handle()).data)


class RecentTransactionsView(APIView):
    permission_classes = [IsAuthenticatedUser]

    @extend_schema(operation_id="recent_transactions", summary="Recent transactions", tags=["Analytics"], responses={200: TransactionSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("recent_transactions"):
            transactions = await ListRecentTransactionsHandler(transaction_repository=_transaction_repo).handle()
            return Response(TransactionSerializer(transactions, many=True).data)


class FinancialStatsView(APIView):
    permission_classes = [IsAuthenticatedUser]

    @extend_schema(operation_id="financial_stats", summary="Financial stats", tags=["Analytics"], responses={200: FinancialStatsSerializer})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_stats)(request)

    async def _handle_stats(self, request: Request) -> Response:
        with tracer.start_as_current_span("financial_stats"):
            handler = GetFinancialStatsHandler(transaction_repository=_transaction_repo, currency_repository=_currency_repo)
            return Response(FinancialStatsSerializer(await handler.handle()).data)


class RevenueHistoryView(APIView):
    permission_classes = [IsAuthenticatedUser]

    @extend_schema(operation_id="revenue_history", summary="Monthly revenue", tags=["Analytics"], responses={200: RevenuePointSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_history)(request)

    async def _handle_history(self, request: Request) -> Response:
        with tracer.start_as_current_span("revenue_history"):
            handler = GetRevenueHistoryHandler(transaction_repository=_transaction_repo, currency_repository=_currency_repo)
            points = await handler.handle()
            return Response(RevenuePointSerializer(points, many=True).data)
