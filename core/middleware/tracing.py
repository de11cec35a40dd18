"""
Tracing middleware for OpenTelemetry.

Opens one server span per request and records sanitized request and
response details on it.
"""

import json
import time
import traceback
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.instrumentation import Status, StatusCode, get_tracer

tracer = get_tracer(__name__)

SENSITIVE_KEYS = ("password", "secret", "token", "authorization")
MAX_BODY = 5000


def sanitize(data, max_depth=3):
    """Redact credential fields and bound the size of a JSON document."""
    if max_depth <= 0:
        return "..."
    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            if any(marker in str(key).lower() for marker in SENSITIVE_KEYS):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, (dict, list)):
                sanitized[key] = sanitize(value, max_depth - 1)
            else:
                sanitized[key] = value if isinstance(value, (int, float, bool)) or value is None else str(value)[:500]
        return sanitized
    if isinstance(data, list):
        return [sanitize(item, max_depth - 1) for item in data[:10]]
    return str(data)[:500]


class TracingMiddleware:
    """Middleware to add distributed tracing to requests."""

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process request with tracing."""
        with tracer.start_as_current_span(f"{request.method} {request.path}") as span:
            self._set_request_attributes(span, request)

            trace_context = span.get_span_context()
            if trace_context.is_valid:
                request.trace_id = format(trace_context.trace_id, "032x")  # type: ignore

            start_time = time.time()
            try:
                response = self.get_response(request)
            except Exception as e:
                self._record_exception(span, e, time.time() - start_time)
                raise
            self._set_response_attributes(span, response, time.time() - start_time)
            return response

    def _set_request_attributes(self, span, request: HttpRequest):
        span.set_attribute("http.method", request.method)
        span.set_attribute("http.route", request.path)
        span.set_attribute("http.user_agent", request.META.get("HTTP_USER_AGENT", ""))
        span.set_attribute("http.remote_addr", request.META.get("REMOTE_ADDR", ""))
        span.set_attribute("http.request.has_bearer", request.META.get("HTTP_AUTHORIZATION", "").startswith("Bearer "))

        correlation_id = getattr(request, "correlation_id", None)
        if correlation_id:
            span.set_attribute("correlation.id", correlation_id)

        for key, value in list(request.GET.items())[:10]:
            if not any(marker in key.lower() for marker in SENSITIVE_KEYS):
                span.set_attribute(f"http.request.query.{key}", str(value))

        if request.content_type == "application/json" and request.body:
            span.set_attribute("http.request.body_size", len(request.body))
            try:
                body = json.loads(request.body)
            except ValueError:
                return
            span.set_attribute("http.request.body", json.dumps(sanitize(body))[:MAX_BODY])

    def _set_response_attributes(self, span, response, duration: float):
        span.set_attribute("http.status_code", response.status_code)
        span.set_attribute("http.duration_ms", round(duration * 1000, 2))

        if response.status_code >= 400 and not getattr(response, "streaming", False):
            try:
                body = json.loads(response.content)
            except ValueError:
                body = None
            if isinstance(body, dict) and "message" in body:
                span.set_attribute("error.message", str(body["message"]))

        if response.status_code >= 500:
            span.set_status(Status(StatusCode.ERROR, f"HTTP {response.status_code}"))
        else:
            span.set_status(Status(StatusCode.OK))

    @staticmethod
    def _record_exception(span, e: Exception, duration: float):
        span.set_attribute("http.duration_ms", round(duration * 1000, 2))
        span.set_attribute("error", True)
        span.set_attribute("error.type", type(e).__name__)
        span.set_attribute("error.message", str(e))
        span.set_attribute(
            "error.stack_trace",
            "".join(traceback.format_exception(type(e), e, e.__traceback__))[:10000],
        )
        span.set_status(Status(StatusCode.ERROR, f"{type(e).__name__}: {e}"))
