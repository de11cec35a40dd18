"""
Notification queries.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class DeviceNotificationsQuery:
    """Notification feed of one POS installation."""

    serial: Optional[str]
