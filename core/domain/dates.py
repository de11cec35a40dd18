"""
Calendar helpers used by license and subscription rules.
"""
import calendar
import math
from datetime import datetime, timedelta, timezone
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def add_months(moment: datetime, months: int) -> datetime:
    """
    Shift a datetime by a number of calendar months.

    The day of month is clamped to the last day of the target month,
    so Jan 31 + 1 month is Feb 28 (or 29).

    Args:
        moment: Starting datetime
        months: Number of months to add (may be negative)

    Returns:
        Shifted datetime with the same time of day and tzinfo
    """
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def remaining_days(expire_date: Optional[datetime], now: datetime) -> int:
    """
    Whole days left until expire_date, rounded up and never negative.

    Args:
        expire_date: Expiration datetime (None counts as zero days)
        now: Reference time

    Returns:
        Number of remaining days
    """
    if expire_date is None:
        return 0
    seconds = (expire_date - now).total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / SECONDS_PER_DAY)


def start_of_day(moment: datetime) -> datetime:
    """Return midnight of the given day."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(moment: datetime) -> datetime:
    """Return midnight of the first day of the given month."""
    return start_of_day(moment).replace(day=1)


def days_from(moment: datetime, days: int) -> datetime:
    """Return moment shifted by a number of days."""
    return moment + timedelta(days=days)
