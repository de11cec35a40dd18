"""
Audit log and traffic log handlers.
"""
import math
from typing import List

from audit.application.dto.traffic_dto import PageMetaDTO, TrafficLogPageDTO
from audit.application.queries.audit_queries import (
    GetTrafficLogQuery,
    ListAuditLogsQuery,
    SearchTrafficLogsQuery,
)
from audit.application.services.audit_service import AuditTrail
from audit.domain.audit_log import Actor, AuditAction, AuditLog
from audit.domain.traffic_log import TrafficLog
from audit.ports.audit_log_repository import AuditLogRepository
from audit.ports.traffic_log_repository import TrafficLogRepository
from core.domain.exceptions import TrafficLogNotFoundError


class ListAuditLogsHandler:
    """Handler for ListAuditLogsQuery."""

    def __init__(self, audit_log_repository: AuditLogRepository):
        self.audit_log_repository = audit_log_repository

    async def handle(self, query: ListAuditLogsQuery) -> List[AuditLog]:
        return await self.audit_log_repository.list(
            action=query.action, user_id=query.user_id, limit=query.limit
        )


class ClearAuditLogsHandler:
    """
    Clear the audit log.

    The clearing itself is recorded as the first entry of the new log.
    """

    def __init__(self, audit_log_repository: AuditLogRepository):
        self.audit_log_repository = audit_log_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, actor: Actor) -> int:
        """
        Delete every entry then audit CLEAR_LOGS.

        Returns:
            Number of deleted entries
        """
        deleted = await self.audit_log_repository.clear()
        await self.audit.record(
            AuditAction.CLEAR_LOGS, f"Cleared {deleted} audit log entries", actor
        )
        return deleted


class SearchTrafficLogsHandler:
    """Handler for SearchTrafficLogsQuery."""

    def __init__(self, traffic_log_repository: TrafficLogRepository):
        self.traffic_log_repository = traffic_log_repository

    async def handle(self, query: SearchTrafficLogsQuery) -> TrafficLogPageDTO:
        """
        Return one page of traffic and its pagination metadata.

        Args:
            query: SearchTrafficLogsQuery

        Returns:
            TrafficLogPageDTO
        """
        criteria = query.criteria
        entries, total = await self.traffic_log_repository.search(criteria)
        return TrafficLogPageDTO(
            data=entries,
            meta=PageMetaDTO(
                total=total,
                page=criteria.page,
                limit=criteria.limit,
                total_pages=math.ceil(total / criteria.limit) if criteria.limit else 0,
            ),
        )


class GetTrafficLogHandler:
    """Handler for GetTrafficLogQuery."""

    def __init__(self, traffic_log_repository: TrafficLogRepository):
        self.traffic_log_repository = traffic_log_repository

    async def handle(self, query: GetTrafficLogQuery) -> TrafficLog:
        """
        Raises:
            TrafficLogNotFoundError: If no entry has this ID
        """
        entry = await self.traffic_log_repository.find_by_id(query.log_id)
        if not entry:
            raise TrafficLogNotFoundError()
        return entry


class ClearTrafficLogsHandler:
    """Delete all captured traffic and audit TRAFFIC_LOGS_CLEARED."""

    def __init__(
        self,
        traffic_log_repository: TrafficLogRepository,
        audit_log_repository: AuditLogRepository,
    ):
        self.traffic_log_repository = traffic_log_repository
        self.audit = AuditTrail(audit_log_repository)

    async def handle(self, actor: Actor) -> int:
        deleted = await self.traffic_log_repository.clear()
        await self.audit.record(
            AuditAction.TRAFFIC_LOGS_CLEARED, "Traffic logs cleared by admin", actor
        )
        return deleted
