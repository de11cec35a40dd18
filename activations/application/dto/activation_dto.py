"""
Activation DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ActivationResultDTO:
    """DTO for a successful activation."""

    license_id: uuid.UUID
    device_id: uuid.UUID
    activation_date: Optional[datetime]
    reactivation: bool
    message: str = "Device activated successfully."


@dataclass
class HeartbeatResultDTO:
    """DTO for a heartbeat acknowledgement."""

    success: bool
    timestamp: datetime
