"""Business-day arithmetic over the Monday-Friday calendar.

Weekends are the only non-business days; public holidays are not modelled.
"""

from __future__ import annotations

from datetime import datetime, timedelta

# datetime.weekday(): Monday == 0 ... Saturday == 5, Sunday == 6
WEEKEND_DAYS: frozenset[int] = frozenset({5, 6})


def is_business_day(moment: datetime) -> bool:
    """Check if the moment falls on a weekday."""
    return moment.weekday() not in WEEKEND_DAYS


def add_business_days(start: datetime, days: int) -> datetime:
    """Advance a moment by a number of business days.

    Steps one calendar day at a time, skipping Saturday and Sunday, until
    `days` weekdays have been added. The start day itself is never counted,
    so a Friday plus one business day is the following Monday. The time of
    day is preserved.

    Args:
        start: Moment to count from.
        days: Business days to add (zero returns `start`).

    Returns:
        The resulting moment.

    Raises:
        ValueError: If days is negative.
    """
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}")

    current = start
    added = 0
    while added < days:
        current = current + timedelta(days=1)
        if is_business_day(current):
            added += 1
    return current


def end_of_day(moment: datetime) -> datetime:
    """Normalize a moment to 23:59:59 on its own date and timezone."""
    return moment.replace(hour=23, minute=59, second=59, microsecond=0)
