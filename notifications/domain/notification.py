"""
Notification domain entity.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError
from core.domain.value_objects import ProductType

DEVICE_FEED_SIZE = 20


class Channel(Enum):
    """Delivery channel, derived from whether a serial is targeted."""

    DIRECT = "direct"
    BROADCAST = "broadcast"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Notification:
    """A message shown inside client software."""

    id: uuid.UUID
    title: str
    body: str
    channel: Channel
    product_type: ProductType
    sent_at: datetime
    target_serial: Optional[str] = None

    @classmethod
    def compose(
        cls,
        title: str,
        body: str,
        target_serial: Optional[str] = None,
        product_type: ProductType = ProductType.POS,
    ) -> "Notification":
        """
        Create a notification ready to send.

        Args:
            title: Headline (required)
            body: Message text (required)
            target_serial: Serial of the one installation to reach, if any
            product_type: Product line whose installations receive it

        Returns:
            Notification entity

        Raises:
            DomainValidationError: If title or body is empty
        """
        if not title or not title.strip():
            raise DomainValidationError("title is required")
        if not body or not body.strip():
            raise DomainValidationError("body is required")

        target = target_serial.strip() if target_serial and target_serial.strip() else None
        return cls(
            id=uuid.uuid4(),
            title=title.strip(),
            body=body.strip(),
            channel=Channel.DIRECT if target else Channel.BROADCAST,
            product_type=product_type,
            sent_at=utcnow(),
            target_serial=target,
        )

    def reaches(self, serial: str, product_type: ProductType = ProductType.POS) -> bool:
        """Whether an installation with this serial should display it."""
        if self.product_type != product_type:
            return False
        return self.target_serial is None or self.target_serial == serial
