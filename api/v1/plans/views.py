"""
Plan and currency API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import IsAdmin, IsAuthenticatedUser
from api.utils import actor_from_request
from api.v1.plans.serializers import (
    CurrencyCreateSerializer,
    CurrencySerializer,
    CurrencyUpdateSerializer,
    PlanRequestSerializer,
    PlanSerializer,
    PublicPlanSerializer,
    RateSyncSerializer,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import Status, StatusCode, get_tracer
from plans.application.commands.currency_commands import (
    AddCurrencyCommand,
    DeleteCurrencyCommand,
    SyncCurrencyRatesCommand,
    UpdateCurrencyCommand,
)
from plans.application.commands.plan_commands import (
    CreatePlanCommand,
    DeletePlanCommand,
    SetPlanActiveCommand,
    UpdatePlanCommand,
)
from plans.application.handlers.currency_handlers import (
    AddCurrencyHandler,
    DeleteCurrencyHandler,
    ListCurrenciesHandler,
    SyncCurrencyRatesHandler,
    UpdateCurrencyHandler,
)
from plans.application.handlers.plan_handlers import (
    CreatePlanHandler,
    DeletePlanHandler,
    ListPlansHandler,
    SetPlanActiveHandler,
    UpdatePlanHandler,
)
from plans.infrastructure.repositories.django_currency_repository import DjangoCurrencyRepository
from plans.infrastructure.repositories.django_plan_repository import DjangoPlanRepository

_plan_repo = DjangoPlanRepository()
_currency_repo = DjangoCurrencyRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class PlanListView(APIView):
    """List and create plans."""

    permission_classes = [IsAdmin]

    @extend_schema(operation_id="list_plans", summary="List plans", tags=["Plans"], responses={200: PlanSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_plans") as span:
            plans = await ListPlansHandler(plan_repository=_plan_repo).handle()
            span.set_attribute("plans.count", len(plans))
            return Response(PlanSerializer(plans, many=True).data)

    @extend_schema(
        operation_id="create_plan",
        summary="Create plan",
        tags=["Plans"],
        request=PlanRequestSerializer,
        responses={201: PlanSerializer, 400: None},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_plan") as span:
            serializer = PlanRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = CreatePlanHandler(plan_repository=_plan_repo, audit_log_repository=_audit_repo)
            plan = await handler.handle(
                CreatePlanCommand(**serializer.command_kwargs(), actor=actor_from_request(request))
            )

            span.set_attribute("plan.id", str(plan.id))
            span.set_status(Status(StatusCode.OK))
            return Response(PlanSerializer(plan).data, status=status.HTTP_201_CREATED)


class PlanDetailView(APIView):
    """Replace or delete a plan."""

    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="update_plan",
        summary="Update plan",
        description="Replaces every field of the plan; prices are swapped atomically.",
        tags=["Plans"],
        request=PlanRequestSerializer,
        responses={200: PlanSerializer, 400: None, 404: None},
    )
    def put(self, request: Request, plan_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, plan_id)

    async def _handle_update(self, request: Request, plan_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_plan") as span:
            span.set_attribute("plan.id", str(plan_id))
            serializer = PlanRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = UpdatePlanHandler(plan_repository=_plan_repo, audit_log_repository=_audit_repo)
            plan = await handler.handle(
                UpdatePlanCommand(plan_id=plan_id, **serializer.command_kwargs(), actor=actor_from_request(request))
            )
            span.set_status(Status(StatusCode.OK))
            return Response(PlanSerializer(plan).data)

    @extend_schema(operation_id="delete_plan", summary="Delete plan", tags=["Plans"], responses={204: None, 404: None})
    def delete(self, request: Request, plan_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, plan_id)

    async def _handle_delete(self, request: Request, plan_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_plan") as span:
            span.set_attribute("plan.id", str(plan_id))
            handler = DeletePlanHandler(plan_repository=_plan_repo, audit_log_repository=_audit_repo)
            await handler.handle(DeletePlanCommand(plan_id=plan_id, actor=actor_from_request(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)


class PlanActivationView(APIView):
    """Activate or deactivate a plan; the flag comes from the URL."""

    permission_classes = [IsAdmin]
    is_active = True

    @extend_schema(operation_id="set_plan_active", summary="Activate or deactivate plan", tags=["Plans"], request=None, responses={200: PlanSerializer, 404: None})
    def patch(self, request: Request, plan_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_toggle)(request, plan_id)

    async def _handle_toggle(self, request: Request, plan_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("set_plan_active") as span:
            span.set_attribute("plan.id", str(plan_id))
            span.set_attribute("plan.is_active", self.is_active)
            handler = SetPlanActiveHandler(plan_repository=_plan_repo, audit_log_repository=_audit_repo)
            plan = await handler.handle(
                SetPlanActiveCommand(plan_id=plan_id, is_active=self.is_active, actor=actor_from_request(request))
            )
            return Response(PlanSerializer(plan).data)


class PublicPlanListView(APIView):
    """Active plans for the public pricing page."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(operation_id="list_public_plans", summary="Public plans", tags=["Plans"], responses={200: PublicPlanSerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_public_plans"):
            plans = await ListPlansHandler(plan_repository=_plan_repo).handle(active_only=True)
            return Response({"plans": PublicPlanSerializer(plans, many=True).data})


class CurrencyListView(APIView):
    """List (any user) and add (admin) currencies."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticatedUser()]
        return [IsAdmin()]

    @extend_schema(operation_id="list_currencies", summary="List currencies", tags=["Currencies"], responses={200: CurrencySerializer(many=True)})
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_currencies"):
            currencies = await ListCurrenciesHandler(currency_repository=_currency_repo).handle()
            return Response(CurrencySerializer(currencies, many=True).data)

    @extend_schema(
        operation_id="add_currency",
        summary="Add currency",
        tags=["Currencies"],
        request=CurrencyCreateSerializer,
        responses={201: CurrencySerializer, 400: None, 409: {"description": "Currency code already exists"}},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_add)(request)

    async def _handle_add(self, request: Request) -> Response:
        with tracer.start_as_current_span("add_currency") as span:
            serializer = CurrencyCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = AddCurrencyHandler(currency_repository=_currency_repo, audit_log_repository=_audit_repo)
            currency = await handler.handle(
                AddCurrencyCommand(
                    code=data["code"].upper(),
                    rate=data["rate"],
                    symbol=data["symbol"],
                    actor=actor_from_request(request),
                )
            )
            span.set_attribute("currency.code", currency.code)
            return Response(CurrencySerializer(currency).data, status=status.HTTP_201_CREATED)


class CurrencyDetailView(APIView):
    """Update or delete a currency by code."""

    permission_classes = [IsAdmin]

    @extend_schema(
        operation_id="update_currency",
        summary="Update currency",
        tags=["Currencies"],
        request=CurrencyUpdateSerializer,
        responses={200: CurrencySerializer, 404: None},
    )
    def patch(self, request: Request, code: str) -> Response:
        return async_to_sync(self._handle_update)(request, code)

    async def _handle_update(self, request: Request, code: str) -> Response:
        with tracer.start_as_current_span("update_currency") as span:
            span.set_attribute("currency.code", code)
            serializer = CurrencyUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = UpdateCurrencyHandler(currency_repository=_currency_repo, audit_log_repository=_audit_repo)
            currency = await handler.handle(
                UpdateCurrencyCommand(
                    code=code.upper(),
                    rate=serializer.validated_data.get("rate"),
                    symbol=serializer.validated_data.get("symbol"),
                    actor=actor_from_request(request),
                )
            )
            return Response(CurrencySerializer(currency).data)

    @extend_schema(operation_id="delete_currency", summary="Delete currency", tags=["Currencies"], responses={204: None, 404: None})
    def delete(self, request: Request, code: str) -> Response:
        return async_to_sync(self._handle_delete)(request, code)

    async def _handle_delete(self, request: Request, code: str) -> Response:
        with tracer.start_as_current_span("delete_currency"):
            handler = DeleteCurrencyHandler(currency_repository=_currency_repo, audit_log_repository=_audit_repo)
            await handler.handle(DeleteCurrencyCommand(code=code, actor=actor_from_request(request)))
            return Response(status=status.HTTP_204_NO_CONTENT)


class CurrencySyncView(APIView):
    """Refresh every stored rate from the exchange-rate provider."""

    permission_classes = [IsAdmin]

    @extend_schema(operation_id="sync_currency_rates", summary="Sync exchange rates", tags=["Currencies"], request=None, responses={200: RateSyncSerializer})
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_sync)(request)

    async def _handle_sync(self, request: Request) -> Response:
        with tracer.start_as_current_span("sync_currency_rates") as span:
            handler = SyncCurrencyRatesHandler(currency_repository=_currency_repo, audit_log_repository=_audit_repo)
            result = await handler.handle(SyncCurrencyRatesCommand(actor=actor_from_request(request)))
            span.set_attribute("currencies.updated", result.updated)
            span.set_attribute("rates.source", result.source)
            span.set_status(Status(StatusCode.OK))
            return Response(RateSyncSerializer(result).data)
