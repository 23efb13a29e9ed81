"""Deadline value objects derived from the deadline rule matrix."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, eq=True)
class DeadlineRule:
    """Business-day offsets for one (item type, priority) pair.

    Attributes:
        proposal_days: Business days suppliers have to submit proposals.
        delivery_days: Business days for delivery, counted from the
            proposal deadline.
    """

    proposal_days: int
    delivery_days: int

    def __post_init__(self) -> None:
        if self.proposal_days < 0 or self.delivery_days < 0:
            raise ValueError("Deadline rule offsets must be non-negative")


@dataclass(frozen=True, eq=True)
class Deadlines:
    """Computed end-of-day deadlines of a demand."""

    proposal_deadline: datetime
    delivery_deadline: datetime

    def __post_init__(self) -> None:
        if self.delivery_deadline < self.proposal_deadline:
            raise ValueError("delivery_deadline must not precede proposal_deadline")
