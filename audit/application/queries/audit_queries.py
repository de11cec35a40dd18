"""
Audit and traffic log queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from audit.domain.traffic_log import TrafficLogFilter


@dataclass
class ListAuditLogsQuery:
    """Query for the newest audit entries."""

    action: Optional[str] = None
    user_id: Optional[uuid.UUID] = None
    limit: int = 200


@dataclass
class SearchTrafficLogsQuery:
    """Query for one page of captured client traffic."""

    criteria: TrafficLogFilter


@dataclass
class GetTrafficLogQuery:
    """Query for one captured request."""

    log_id: uuid.UUID
