"""
Metrics middleware for Prometheus.

Records HTTP request metrics for monitoring.
"""

import re
import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import (
    http_request_duration_seconds,
    http_requests_total,
)

UUID_SEGMENT = re.compile(r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)
NUMERIC_SEGMENT = re.compile(r"/\d+(?=/|$)")
CURRENCY_SEGMENT = re.compile(r"(/api/currencies)/[A-Za-z]{3}(?=/|$)")


def normalize_endpoint(path: str) -> str:
    """
    Collapse identifiers so that metric label cardinality stays bounded.

    >>> normalize_endpoint("/api/licenses/1b4e28ba-2fa1-11d2-883f-0016d3cca427/renew")
    '/api/licenses/{id}/renew'
    """
    endpoint = UUID_SEGMENT.sub("/{id}", path)
    endpoint = NUMERIC_SEGMENT.sub("/{id}", endpoint)
    return CURRENCY_SEGMENT.sub(r"\1/{code}", endpoint)


class MetricsMiddleware:
    """
    Middleware to record HTTP metrics for Prometheus.

    Records:
    - Request count by method, endpoint, status
    - Request duration histogram
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process request and record metrics."""
        start_time = time.time()
        endpoint = normalize_endpoint(request.path)
        status_code = 500

        try:
            response = self.get_response(request)
            status_code = response.status_code
            return response
        finally:
            http_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=status_code,
            ).inc()
            http_request_duration_seconds.labels(
                method=request.method,
                endpoint=endpoint,
            ).observe(time.time() - start_time)
