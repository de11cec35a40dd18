"""
Notification repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List

from core.domain.value_objects import ProductType
from notifications.domain.notification import Notification


class NotificationRepository(ABC):
    """Abstract repository for Notification entities."""

    @abstractmethod
    async def add(self, notification: Notification) -> Notification:
        """Persist a new notification."""

    @abstractmethod
    async def list_all(self) -> List[Notification]:
        """Every notification, newest first."""

    @abstractmethod
    async def list_for_serial(self, serial: str, product_type: ProductType, limit: int) -> List[Notification]:
        """
        Notifications an installation should display.

        Args:
            serial: Serial of the installation
            product_type: Product line of the installation
            limit: Maximum number of rows

        Returns:
            Broadcasts and notifications targeted at the serial, newest first
        """

    @abstractmethod
    async def delete(self, notification_id: uuid.UUID) -> bool:
        """Delete one notification."""

    @abstractmethod
    async def clear(self) -> int:
        """
        Delete every notification.

        Returns:
            Number of rows deleted
        """
