"""
Request helpers shared by the API views.
"""

import uuid
from typing import Optional

from audit.domain.audit_log import Actor
from core.domain.exceptions import DomainValidationError
from core.middleware.observability import client_ip


def actor_from_request(request) -> Actor:
    """Audit actor for the request: the signed-in user and the client IP."""
    user = getattr(request, "user", None)
    user_id = user.pk if user is not None and user.is_authenticated else None
    return Actor(user_id=user_id, ip_address=client_ip(request))


def parse_uuid(value, field: str = "id") -> uuid.UUID:
    """
    Parse a UUID path or body value.

    Raises:
        DomainValidationError: If the value is not a UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError) as exc:
        raise DomainValidationError(f"Invalid {field}") from exc


def optional_uuid(value, field: str = "id") -> Optional[uuid.UUID]:
    """Like parse_uuid but passes empty values through as None."""
    if value in (None, ""):
        return None
    return parse_uuid(value, field)


def bearer_token(request) -> Optional[str]:
    """Raw token of an ``Authorization: Bearer`` header, if any."""
    header = request.META.get("HTTP_AUTHORIZATION", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
