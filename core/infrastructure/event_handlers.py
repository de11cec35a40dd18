"""
Event handlers for domain events.

Handlers run in-process after the publishing handler has committed its
work. They carry side effects that must never fail the request.
"""

import logging

from activations.domain.events import LicenseActivated
from clinics.domain.events import (
    ClinicApproved,
    ClinicDeleted,
    ClinicRegistered,
    ClinicStatusChanged,
    SessionsRevoked,
)
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import (
    LicenseDeleted,
    LicenseExpired,
    LicenseGenerated,
    LicensePauseToggled,
    LicenseRenewed,
    LicenseRevoked,
    LicenseUpdated,
)

logger = logging.getLogger(__name__)

LICENSE_EVENTS = (
    LicenseGenerated,
    LicenseRenewed,
    LicensePauseToggled,
    LicenseRevoked,
    LicenseUpdated,
    LicenseDeleted,
    LicenseExpired,
    LicenseActivated,
)

CLINIC_EVENTS = (
    ClinicRegistered,
    ClinicApproved,
    ClinicStatusChanged,
    ClinicDeleted,
    SessionsRevoked,
)


class EventLogHandler(EventHandler):
    """Writes every domain event to the structured log."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for structured logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Domain event: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
                "payload": event.payload(),
            },
        )


class ForcedLogoutWarningHandler(EventHandler):
    """Flags large session revocations, which usually mean a clinic was cut off."""

    threshold = 10

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, SessionsRevoked) and event.count >= self.threshold:
            logger.warning(
                "Large forced logout",
                extra={"clinic_id": event.aggregate_id, "count": event.count, "reason": event.reason},
            )


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    log_handler = EventLogHandler()
    for event_type in LICENSE_EVENTS + CLINIC_EVENTS:
        event_bus.subscribe(event_type, log_handler)

    event_bus.subscribe(SessionsRevoked, ForcedLogoutWarningHandler())

    logger.info("Event handlers registered")
