"""
Client activation commands.

Commands sent by installed clients: activation and heartbeat.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license on a machine."""

    serial: str
    hardware_id: str
    device_name: Optional[str] = None
    app_version: Optional[str] = None


@dataclass
class HeartbeatCommand:
    """Periodic check-in from a running client."""

    serial: str
    hardware_id: Optional[str] = None
    app_version: Optional[str] = None
    device_name: Optional[str] = None
