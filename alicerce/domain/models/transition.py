"""Lifecycle actions, supplied evidence and the resulting patch.

The lifecycle machine is a pure decision function: it receives a demand
snapshot, an action and evidence, and returns a DemandPatch naming exactly
the fields the caller must persist.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from alicerce.domain.models.demand import Award, Demand, DemandStatus, Item


class DemandAction(str, Enum):
    """Operator actions that move a demand through its lifecycle."""

    SUBMIT_FOR_REVIEW = "submit_for_review"
    ADJUST_ITEMS = "adjust_items"
    REJECT = "reject"
    APPROVE = "approve"
    CLOSE_BIDDING = "close_bidding"
    HOMOLOGATE = "homologate"
    FINALIZE = "finalize"
    CLOSE = "close"
    CANCEL = "cancel"


class ClosingKind(str, Enum):
    """Why bidding was closed, kept for audit."""

    EXPIRED = "expired"
    EARLY = "early"

    @property
    def label(self) -> str:
        return CLOSING_LABELS[self]


CLOSING_LABELS: dict[ClosingKind, str] = {
    ClosingKind.EXPIRED: "Closed at deadline",
    ClosingKind.EARLY: "Closed early",
}


# Maps each action to the statuses it may start from and its target status.
ACTION_TRANSITIONS: dict[DemandAction, tuple[frozenset[DemandStatus], DemandStatus]] = {
    DemandAction.SUBMIT_FOR_REVIEW: (
        frozenset({DemandStatus.DRAFT}),
        DemandStatus.PENDING_WAREHOUSE_REVIEW,
    ),
    DemandAction.ADJUST_ITEMS: (
        frozenset({DemandStatus.PENDING_WAREHOUSE_REVIEW}),
        DemandStatus.PENDING_WAREHOUSE_REVIEW,
    ),
    DemandAction.REJECT: (
        frozenset({DemandStatus.PENDING_WAREHOUSE_REVIEW}),
        DemandStatus.REJECTED,
    ),
    DemandAction.APPROVE: (
        frozenset({DemandStatus.PENDING_WAREHOUSE_REVIEW}),
        DemandStatus.OPEN_FOR_BIDDING,
    ),
    DemandAction.CLOSE_BIDDING: (
        frozenset({DemandStatus.OPEN_FOR_BIDDING}),
        DemandStatus.UNDER_ANALYSIS,
    ),
    DemandAction.HOMOLOGATE: (
        frozenset({DemandStatus.UNDER_ANALYSIS}),
        DemandStatus.AWARD_DEFINED,
    ),
    DemandAction.FINALIZE: (
        frozenset({DemandStatus.AWARD_DEFINED}),
        DemandStatus.COMPLETED,
    ),
    DemandAction.CLOSE: (
        frozenset({DemandStatus.UNDER_ANALYSIS, DemandStatus.AWARD_DEFINED}),
        DemandStatus.CLOSED,
    ),
    DemandAction.CANCEL: (
        frozenset(
            {
                DemandStatus.DRAFT,
                DemandStatus.PENDING_WAREHOUSE_REVIEW,
                DemandStatus.OPEN_FOR_BIDDING,
                DemandStatus.UNDER_ANALYSIS,
            }
        ),
        DemandStatus.CANCELLED,
    ),
}


def target_status(action: DemandAction) -> DemandStatus:
    return ACTION_TRANSITIONS[action][1]


def allowed_actions(status: DemandStatus) -> tuple[DemandAction, ...]:
    """Actions legal from the given status, in declaration order."""
    return tuple(
        action
        for action, (sources, _target) in ACTION_TRANSITIONS.items()
        if status in sources
    )


@dataclass(frozen=True)
class TransitionEvidence:
    """Data an operator supplies alongside an action.

    Attributes:
        reason: Rejection, closing, closure or cancellation reason.
        observations: Approval observations visible to bidders.
        items: Replacement item list (item adjustment or approval).
        award: Resolved award (homologation).
        confirmed: Explicit confirmation for administrative finalize.
    """

    reason: str | None = None
    observations: str | None = None
    items: tuple[Item, ...] | None = None
    award: Award | None = None
    confirmed: bool = True


@dataclass(frozen=True)
class DemandPatch:
    """Exactly the demand fields a transition decided to change.

    Fields left as None are untouched by the patch.
    """

    demand_id: int
    action: DemandAction
    status: DemandStatus
    proposal_deadline: datetime | None = None
    delivery_deadline: datetime | None = None
    rejection_reason: str | None = None
    status_reason: str | None = None
    closing_kind: ClosingKind | None = None
    approval_observations: str | None = None
    items: tuple[Item, ...] | None = None
    award: Award | None = None
    decision_date: datetime | None = None

    def changed_fields(self) -> tuple[str, ...]:
        """Names of the demand fields this patch writes."""
        names = ["status"]
        for name in (
            "proposal_deadline",
            "delivery_deadline",
            "rejection_reason",
            "status_reason",
            "approval_observations",
            "items",
            "award",
            "decision_date",
        ):
            if getattr(self, name) is not None:
                names.append(name)
        return tuple(names)


def apply_patch(demand: Demand, patch: DemandPatch) -> Demand:
    """Return the demand snapshot after persisting the patch.

    Raises:
        ValueError: If the patch targets a different demand.
    """
    if patch.demand_id != demand.id:
        raise ValueError(
            f"Patch for demand {patch.demand_id} cannot apply to demand {demand.id}"
        )
    changes = {name: getattr(patch, name) for name in patch.changed_fields()}
    return replace(demand, **changes)
