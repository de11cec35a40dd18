"""
API exception handlers.

Maps domain exceptions and DRF errors to the ``{"message": ...}`` error
envelope returned by every endpoint.
"""

import logging
from typing import Any, Dict, Optional

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AuthenticationError,
    DomainException,
    DomainValidationError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    ResourceExhaustedError,
    StateConflictError,
)
from core.metrics import errors_total
from core.middleware.metrics import normalize_endpoint

logger = logging.getLogger(__name__)

DOMAIN_STATUS = (
    (DomainValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (StateConflictError, status.HTTP_400_BAD_REQUEST),
    (ResourceExhaustedError, status.HTTP_403_FORBIDDEN),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
)


def status_for(exc: DomainException) -> int:
    """HTTP status for a domain exception."""
    for exc_type, status_code in DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, correlation_id)
    elif isinstance(exc, ValidationError):
        response = _handle_validation_error(exc)
    elif isinstance(exc, (APIException, Http404, PermissionDenied)):
        response = exception_handler(exc, context)
        response.data = {"message": _flatten(response.data)}
    else:
        response = _handle_unexpected_exception(exc, correlation_id)

    if correlation_id:
        response["X-Correlation-ID"] = correlation_id
    return response


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract the correlation ID assigned by the observability middleware."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _flatten(detail) -> str:
    """First human readable message of a DRF error structure."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _flatten(detail["detail"])
        for field, value in detail.items():
            message = _flatten(value)
            if field == "non_field_errors":
                return message
            return f"{field}: {message}"
        return "Invalid input"
    if isinstance(detail, (list, tuple)):
        return _flatten(detail[0]) if detail else "Invalid input"
    return str(detail)


def _handle_validation_error(exc: ValidationError) -> Response:
    errors = exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail}
    return Response(
        {"message": _flatten(exc.detail), "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _handle_domain_exception(exc: DomainException, context: Dict[str, Any], correlation_id) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_for(exc)
    request = context.get("request")
    errors_total.labels(
        error_type=exc.code,
        endpoint=normalize_endpoint(request.path) if request is not None else "",
    ).inc()
    logger.warning(
        "Domain exception: %s - %s",
        exc.code,
        exc.message,
        extra={"correlation_id": correlation_id, "status_code": status_code},
    )
    return Response({"message": exc.message}, status=status_code)


def _handle_unexpected_exception(exc: Exception, correlation_id: Optional[str]) -> Response:
    """Log the full error and hide it from the client."""
    logger.error(
        "Unexpected error: %s",
        exc,
        extra={"correlation_id": correlation_id},
        exc_info=exc,
    )
    errors_total.labels(error_type=type(exc).__name__, endpoint="").inc()
    return Response(
        {"message": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
