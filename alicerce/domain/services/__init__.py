"""Domain services: pure decision functions of the bidding engine."""

from alicerce.domain.services.award_resolution import (
    resolve_award,
    suggest_justification,
)
from alicerce.domain.services.bid_ranking import analyze_bids
from alicerce.domain.services.business_calendar import add_business_days, end_of_day
from alicerce.domain.services.deadline_rules import (
    DEADLINE_RULES,
    compute_deadlines,
    lookup_deadline_rule,
)
from alicerce.domain.services.demand_lifecycle import request_transition
from alicerce.domain.services.price_history import (
    price_history,
    summarize_price_history,
)

__all__ = [
    "DEADLINE_RULES",
    "add_business_days",
    "analyze_bids",
    "compute_deadlines",
    "end_of_day",
    "lookup_deadline_rule",
    "price_history",
    "request_transition",
    "resolve_award",
    "suggest_justification",
    "summarize_price_history",
]
