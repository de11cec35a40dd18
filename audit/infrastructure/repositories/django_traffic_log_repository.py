"""
Django implementation of TrafficLogRepository port.
"""
import uuid
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db.models import Q

from audit.domain.traffic_log import TrafficLog, TrafficLogFilter
from audit.infrastructure.models import TrafficLog as TrafficLogModel
from audit.ports.traffic_log_repository import TrafficLogRepository


class DjangoTrafficLogRepository(TrafficLogRepository):
    """Django ORM implementation of TrafficLogRepository."""

    def _to_domain(self, model: TrafficLogModel) -> TrafficLog:
        return TrafficLog(
            id=model.id,
            method=model.method,
            endpoint=model.endpoint,
            status=model.status,
            serial=model.serial,
            hardware_id=model.hardware_id,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            payload=model.payload,
            response=model.response,
            duration_ms=model.duration_ms,
            timestamp=model.timestamp,
        )

    def save_sync(self, entry: TrafficLog) -> TrafficLog:
        """
        Persist an entry from synchronous code (request middleware).

        Args:
            entry: TrafficLog entity

        Returns:
            The stored entry
        """
        TrafficLogModel.objects.create(
            id=entry.id,
            timestamp=entry.timestamp,
            method=entry.method,
            endpoint=entry.endpoint,
            status=entry.status,
            serial=entry.serial,
            hardware_id=entry.hardware_id,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            payload=entry.payload,
            response=entry.response,
            duration_ms=entry.duration_ms,
        )
        return entry

    async def add(self, entry: TrafficLog) -> TrafficLog:
        return await sync_to_async(self.save_sync)(entry)

    @sync_to_async
    def search(self, criteria: TrafficLogFilter) -> Tuple[List[TrafficLog], int]:
        """
        Search entries newest first.

        Text filters are case-insensitive substring matches; ``search``
        matches endpoint, serial, hardware ID or IP address.
        """
        queryset = TrafficLogModel.objects.all()
        if criteria.method:
            queryset = queryset.filter(method=criteria.method.upper())
        if criteria.status is not None:
            queryset = queryset.filter(status=criteria.status)
        if criteria.endpoint:
            queryset = queryset.filter(endpoint__icontains=criteria.endpoint)
        if criteria.serial:
            queryset = queryset.filter(serial__icontains=criteria.serial)
        if criteria.hardware_id:
            queryset = queryset.filter(hardware_id__icontains=criteria.hardware_id)
        if criteria.start_date:
            queryset = queryset.filter(timestamp__gte=criteria.start_date)
        if criteria.end_date:
            queryset = queryset.filter(timestamp__lte=criteria.end_date)
        if criteria.search:
            term = criteria.search
            queryset = queryset.filter(
                Q(endpoint__icontains=term)
                | Q(serial__icontains=term)
                | Q(hardware_id__icontains=term)
                | Q(ip_address__icontains=term)
            )

        total = queryset.count()
        page = queryset.order_by("-timestamp")[criteria.offset : criteria.offset + criteria.limit]
        return [self._to_domain(model) for model in page], total

    @sync_to_async
    def find_by_id(self, log_id: uuid.UUID) -> Optional[TrafficLog]:
        model = TrafficLogModel.objects.filter(id=log_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def clear(self) -> int:
        deleted, _ = TrafficLogModel.objects.all().delete()
        return deleted
