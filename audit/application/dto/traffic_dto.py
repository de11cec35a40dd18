"""
Traffic log DTOs for API responses.
"""
from dataclasses import dataclass
from typing import List

from audit.domain.traffic_log import TrafficLog


@dataclass
class PageMetaDTO:
    """Pagination metadata."""

    total: int
    page: int
    limit: int
    total_pages: int


@dataclass
class TrafficLogPageDTO:
    """One page of traffic entries."""

    data: List[TrafficLog]
    meta: PageMetaDTO
