"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They decouple the application handlers from side effects such as
structured event logging.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from core.domain.dates import utcnow


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Subclasses call ``super().__init__`` with the aggregate id and then
    attach their own attributes.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    def __init_subclass__(cls, **kwargs):
        """Automatically set event_type for subclasses."""
        super().__init_subclass__(**kwargs)
        cls.event_type = cls.__name__

    @classmethod
    def base_fields(cls, aggregate_id: Any, occurred_at: Optional[datetime] = None) -> Dict[str, Any]:
        """Build the keyword arguments shared by every event."""
        return {
            "event_id": uuid4(),
            "occurred_at": occurred_at or utcnow(),
            "aggregate_id": str(aggregate_id),
            "event_type": cls.__name__,
        }

    def payload(self) -> Dict[str, Any]:
        """Event specific attributes (everything set after construction)."""
        base = {"event_id", "occurred_at", "aggregate_id", "event_type"}
        return {
            key: (str(value) if isinstance(value, (UUID, datetime)) else value)
            for key, value in self.__dict__.items()
            if key not in base
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "payload": self.payload(),
        }


class EventHandler(ABC):
    """
    Base class for event handlers.

    Event handlers process domain events asynchronously.
    """

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
