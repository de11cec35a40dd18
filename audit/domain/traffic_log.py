"""
Traffic log domain entity.

One entry per request made by client software (POS terminals and
clinic installations).
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from core.domain.dates import utcnow


@dataclass(frozen=True)
class TrafficLog:
    """A captured client request."""

    id: uuid.UUID
    method: str
    endpoint: str
    status: int
    serial: Optional[str] = None
    hardware_id: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    payload: Any = None
    response: Any = None
    duration_ms: Optional[float] = None
    timestamp: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, method: str, endpoint: str, status: int, **extra) -> "TrafficLog":
        """Create a new entry stamped with the current time."""
        return cls(id=uuid.uuid4(), method=method, endpoint=endpoint, status=status, **extra)


@dataclass(frozen=True)
class TrafficLogFilter:
    """Search criteria for the traffic log listing."""

    page: int = 1
    limit: int = 50
    method: Optional[str] = None
    status: Optional[int] = None
    endpoint: Optional[str] = None
    serial: Optional[str] = None
    hardware_id: Optional[str] = None
    search: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
