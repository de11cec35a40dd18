"""
Traffic capture middleware.

Every request made by client software (POS terminals and clinic
installations) is stored as a TrafficLog so support staff can replay
what a device sent and what it got back.
"""

import json
import logging
import time
from typing import Callable, Optional

from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse

from audit.domain.traffic_log import TrafficLog
from audit.infrastructure.repositories.django_traffic_log_repository import DjangoTrafficLogRepository
from core.middleware.observability import client_ip
from core.middleware.tracing import sanitize

logger = logging.getLogger(__name__)

CLIENT_PREFIXES = (
    "/license/",
    "/subscription/",
    "/app/",
    "/config/",
    "/support/request",
    "/api/pos/",
    "/api/subscription/",
)


def is_client_request(path: str) -> bool:
    """True for the endpoints called by device software."""
    return path.startswith(CLIENT_PREFIXES)


def _json_or_none(raw: bytes):
    if not raw:
        return None
    try:
        return sanitize(json.loads(raw))
    except ValueError:
        return None


class TrafficLogMiddleware:
    """Persist a TrafficLog row for every client-facing request."""

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response
        self.repository = DjangoTrafficLogRepository()

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not is_client_request(request.path):
            return self.get_response(request)

        # Read before the view consumes the stream.
        payload = _json_or_none(request.body) if request.method in ("POST", "PUT", "PATCH") else None
        start_time = time.time()
        response = self.get_response(request)
        duration_ms = round((time.time() - start_time) * 1000, 2)

        self._store(request, response, payload, duration_ms)
        return response

    def _store(self, request, response, payload, duration_ms: float) -> None:
        body = payload if isinstance(payload, dict) else {}
        entry = TrafficLog.create(
            method=request.method,
            endpoint=request.path,
            status=response.status_code,
            serial=self._field(request, body, "serial", "HTTP_X_SERIAL", 64),
            hardware_id=self._field(request, body, "hardwareId", "HTTP_X_HARDWARE_ID", 255),
            ip_address=client_ip(request),
            user_agent=(request.META.get("HTTP_USER_AGENT") or "")[:500] or None,
            payload=payload if payload is not None else (dict(request.GET.items()) or None),
            response=None if getattr(response, "streaming", False) else _json_or_none(response.content),
            duration_ms=duration_ms,
        )
        try:
            self.repository.save_sync(entry)
        except DatabaseError:
            logger.warning(
                "Failed to store traffic log",
                extra={"endpoint": request.path, "correlation_id": getattr(request, "correlation_id", None)},
                exc_info=True,
            )

    @staticmethod
    def _field(request, body: dict, name: str, header: str, max_length: int) -> Optional[str]:
        value = body.get(name) or request.GET.get(name) or request.META.get(header)
        return str(value)[:max_length] if value else None
