"""Delivery-time descriptors.

Suppliers describe delivery either as "as per notice" (the demand's own
delivery deadline applies) or as a number of calendar days, optionally
flagged as anticipated. Rendering appends the concrete date in
parentheses so every descriptor shows a date.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

DATE_FORMAT = "%d/%m/%Y"

AS_PER_NOTICE_MARKERS: tuple[str, ...] = ("conforme edital", "as per notice")
ANTICIPATED_MARKERS: tuple[str, ...] = ("(Antecipado)", "(Anticipated)")

_DAYS_PATTERN = re.compile(r"(\d+)\s*(?:dias?|days?)", re.IGNORECASE)
_DATED_PATTERN = re.compile(r"\(.*\d{1,2}/\d{1,2}/\d{2,4}.*\)")


def parse_delivery_days(descriptor: str) -> int | None:
    """Extract the day count from a descriptor like "10 dias", if any."""
    match = _DAYS_PATTERN.search(descriptor)
    return int(match.group(1)) if match else None


def format_delivery_time(
    descriptor: str | None,
    submitted_at: datetime | None,
    delivery_deadline: datetime | None,
) -> str:
    """Render a delivery descriptor with its concrete date.

    Args:
        descriptor: Supplier's delivery-time descriptor.
        submitted_at: When the proposal was submitted.
        delivery_deadline: The demand's delivery deadline.

    Returns:
        The descriptor with a date appended, the descriptor unchanged when
        no date can be derived, or "-" when there is no descriptor.
    """
    if not descriptor or not descriptor.strip():
        return "-"
    text = descriptor.strip()

    if _DATED_PATTERN.search(text):
        return text

    lowered = text.lower()
    if any(marker in lowered for marker in AS_PER_NOTICE_MARKERS):
        if delivery_deadline is None:
            return text
        return f"{text} (until {delivery_deadline.strftime(DATE_FORMAT)})"

    days = parse_delivery_days(text)
    if days is None or submitted_at is None:
        return text

    due = (submitted_at + timedelta(days=days)).strftime(DATE_FORMAT)
    for marker in ANTICIPATED_MARKERS:
        if marker in text:
            return text.replace(marker, f"{marker[:-1]} - {due})")
    return f"{text} (until {due})"
