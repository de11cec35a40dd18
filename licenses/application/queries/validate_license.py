"""
ValidateLicenseQuery.

Query to check whether a serial is currently usable.
"""
from dataclasses import dataclass


@dataclass
class ValidateLicenseQuery:
    """Query to validate a license serial."""

    serial: str
