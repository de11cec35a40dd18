"""
Serial generation.

Serials look like ``SP-2026-7KQ2-M9XD-4HTA``: a tier prefix, the issue
year and three random groups drawn from an alphabet without 0/O/1/I.
Uniqueness is enforced by the database, not here.
"""
import secrets
from datetime import datetime
from typing import Optional

from core.domain.dates import utcnow
from plans.domain.plan import Plan

SERIAL_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
TRIAL_PREFIX = "TR"
PAID_PREFIX = "SP"
GROUP_LENGTH = 4
GROUP_COUNT = 3


def serial_prefix(plan: Plan) -> str:
    """Return TR for zero-price plans, SP otherwise."""
    return TRIAL_PREFIX if plan.is_trial else PAID_PREFIX


def random_group(length: int = GROUP_LENGTH) -> str:
    return "".join(secrets.choice(SERIAL_ALPHABET) for _ in range(length))


class SerialGenerator:
    """Domain service for serial generation."""

    @staticmethod
    def generate(plan: Plan, now: Optional[datetime] = None) -> str:
        """
        Generate a serial for a plan.

        Args:
            plan: Plan the license is issued under
            now: Issue time (defaults to utcnow)

        Returns:
            Serial string
        """
        year = (now or utcnow()).year
        groups = "-".join(random_group() for _ in range(GROUP_COUNT))
        return f"{serial_prefix(plan)}-{year}-{groups}"
