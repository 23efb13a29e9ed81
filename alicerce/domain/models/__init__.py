"""Domain models for the bidding and award engine."""

from alicerce.domain.models.bid_analysis import (
    AliasedProposal,
    BidAnalysis,
    Economicity,
    ItemComparison,
    ItemQuote,
)
from alicerce.domain.models.deadlines import DeadlineRule, Deadlines
from alicerce.domain.models.demand import (
    Award,
    AwardItem,
    AwardMode,
    Demand,
    DemandStatus,
    Item,
    ItemType,
    LineDeclined,
    LineQuote,
    Priority,
    Proposal,
    ProposalItem,
    ProposalStanding,
    Quoted,
)
from alicerce.domain.models.price_history import (
    ItemReference,
    PriceHistoryEntry,
    PriceHistorySummary,
)
from alicerce.domain.models.selection import (
    AwardSelection,
    GlobalSelection,
    ItemSelection,
)
from alicerce.domain.models.transition import (
    ClosingKind,
    DemandAction,
    DemandPatch,
    TransitionEvidence,
    apply_patch,
)

__all__ = [
    "AliasedProposal",
    "Award",
    "AwardItem",
    "AwardMode",
    "AwardSelection",
    "BidAnalysis",
    "ClosingKind",
    "DeadlineRule",
    "Deadlines",
    "Demand",
    "DemandAction",
    "DemandPatch",
    "DemandStatus",
    "Economicity",
    "GlobalSelection",
    "Item",
    "ItemComparison",
    "ItemQuote",
    "ItemReference",
    "ItemSelection",
    "ItemType",
    "LineDeclined",
    "LineQuote",
    "PriceHistoryEntry",
    "PriceHistorySummary",
    "Priority",
    "Proposal",
    "ProposalItem",
    "ProposalStanding",
    "Quoted",
    "TransitionEvidence",
    "apply_patch",
]
