"""Deadline rule engine.

Maps (item type, priority) to business-day offsets and turns them into
end-of-day proposal and delivery deadlines.

Rule Matrix (proposal days / delivery days):
| Type      | Urgent | Medium | Low  |
|-----------|--------|--------|------|
| Materials | 1 / 1  | 3 / 3  | 5 / 5  |
| Services  | 1 / 2  | 3 / 5  | 5 / 10 |

The delivery window counts from the proposal deadline, not from "now".
"""

from __future__ import annotations

from datetime import datetime

from alicerce.domain.models.deadlines import DeadlineRule, Deadlines
from alicerce.domain.models.demand import Demand, ItemType, Priority
from alicerce.domain.services.business_calendar import add_business_days, end_of_day

DEADLINE_RULES: dict[ItemType, dict[Priority, DeadlineRule]] = {
    ItemType.MATERIALS: {
        Priority.URGENT: DeadlineRule(proposal_days=1, delivery_days=1),
        Priority.MEDIUM: DeadlineRule(proposal_days=3, delivery_days=3),
        Priority.LOW: DeadlineRule(proposal_days=5, delivery_days=5),
    },
    ItemType.SERVICES: {
        Priority.URGENT: DeadlineRule(proposal_days=1, delivery_days=2),
        Priority.MEDIUM: DeadlineRule(proposal_days=3, delivery_days=5),
        Priority.LOW: DeadlineRule(proposal_days=5, delivery_days=10),
    },
}


def lookup_deadline_rule(item_type: ItemType, priority: Priority) -> DeadlineRule:
    """Return the business-day offsets for a type and priority."""
    return DEADLINE_RULES[item_type][priority]


def compute_deadlines(
    item_type: ItemType,
    priority: Priority,
    now: datetime,
) -> Deadlines:
    """Compute proposal and delivery deadlines from a reference instant.

    Args:
        item_type: MATERIALS or SERVICES.
        priority: LOW, MEDIUM or URGENT.
        now: Reference instant (usually the approval moment).

    Returns:
        Deadlines normalized to 23:59:59 on their respective dates.

    Example:
        >>> friday = datetime(2024, 3, 1, 10, 0)
        >>> compute_deadlines(ItemType.MATERIALS, Priority.URGENT, friday)
        Deadlines(proposal_deadline=datetime(2024, 3, 4, 23, 59, 59),
                  delivery_deadline=datetime(2024, 3, 5, 23, 59, 59))
    """
    rule = lookup_deadline_rule(item_type, priority)
    proposal_date = add_business_days(now, rule.proposal_days)
    delivery_date = add_business_days(proposal_date, rule.delivery_days)
    return Deadlines(
        proposal_deadline=end_of_day(proposal_date),
        delivery_deadline=end_of_day(delivery_date),
    )


def schedule_if_absent(demand: Demand, now: datetime) -> tuple[Deadlines, bool]:
    """Return the demand's deadlines, computing them only when unset.

    Re-running on an already scheduled demand never moves its deadlines.

    Returns:
        Tuple of (deadlines, computed) where computed is False when the
        existing deadlines were kept.
    """
    if demand.proposal_deadline is not None and demand.delivery_deadline is not None:
        return (
            Deadlines(
                proposal_deadline=demand.proposal_deadline,
                delivery_deadline=demand.delivery_deadline,
            ),
            False,
        )
    return compute_deadlines(demand.item_type, demand.priority, now), True
