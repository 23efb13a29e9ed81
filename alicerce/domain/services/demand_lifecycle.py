"""Demand lifecycle state machine.

A pure decision function: given a demand snapshot, a requested action and
the evidence supplied by the operator, it either raises a procurement
error or returns the DemandPatch the caller must persist. It performs no
I/O and never mutates the snapshot.

Guards:
- SUBMIT_FOR_REVIEW: at least one item, non-empty title and description.
- ADJUST_ITEMS: non-empty replacement item list.
- REJECT: non-empty rejection reason.
- APPROVE: deadlines computed only when absent; observations optional.
- CLOSE_BIDDING: non-empty reason, tagged EXPIRED or EARLY.
- HOMOLOGATE: validated award with non-empty justification.
- FINALIZE: confirmation only.
- CLOSE / CANCEL: non-empty reason.

Legality is always checked before evidence, so a terminal demand reports
InvalidTransitionError whatever evidence is supplied.
"""

from __future__ import annotations

from datetime import datetime

import structlog

from alicerce.domain.errors.procurement import (
    IntegrityError,
    InvalidTransitionError,
    ValidationError,
)
from alicerce.domain.models.demand import Award, AwardMode, Demand, Item
from alicerce.domain.models.transition import (
    ACTION_TRANSITIONS,
    ClosingKind,
    DemandAction,
    DemandPatch,
    TransitionEvidence,
    allowed_actions,
)
from alicerce.domain.services.deadline_rules import schedule_if_absent

logger = structlog.get_logger()


def _require_text(value: str | None, field: str, message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(field, message)
    return value.strip()


def _require_items(items: tuple[Item, ...] | None) -> tuple[Item, ...]:
    if not items:
        raise ValidationError("items", "At least one item is required")
    return tuple(items)


def ensure_transition_allowed(demand: Demand, action: DemandAction) -> None:
    """Raise InvalidTransitionError unless the action is legal now."""
    sources, target = ACTION_TRANSITIONS[action]
    if demand.status.is_terminal() or demand.status not in sources:
        raise InvalidTransitionError(
            current_status=demand.status,
            action=action,
            requested_status=target,
            allowed_actions=allowed_actions(demand.status),
        )


def closing_kind(demand: Demand, now: datetime) -> ClosingKind:
    """EXPIRED once the proposal deadline has passed, EARLY otherwise."""
    if demand.proposal_deadline is not None and now > demand.proposal_deadline:
        return ClosingKind.EXPIRED
    return ClosingKind.EARLY


def validate_award_for_demand(demand: Demand, award: Award) -> None:
    """Check a resolved award still fits the demand snapshot.

    Raises:
        ValidationError: If the award justification is empty.
        IntegrityError: If a winner has no eligible bid in the demand.
    """
    _require_text(
        award.justification,
        "justification",
        "A technical justification is required to homologate",
    )
    active = {p.supplier_name: p for p in demand.active_proposals()}

    if award.mode is AwardMode.GLOBAL:
        if award.supplier_name not in active:
            raise IntegrityError(
                f"supplier {award.supplier_name}",
                f"{award.supplier_name} has no eligible proposal in demand {demand.id}",
            )
        return

    for award_item in award.items:
        if demand.item_by_id(award_item.item_id) is None:
            raise IntegrityError(
                f"item {award_item.item_id}",
                f"Item {award_item.item_id} does not belong to demand {demand.id}",
            )
        proposal = active.get(award_item.supplier_name)
        if proposal is None or proposal.quoted_price_for(award_item.item_id) is None:
            raise IntegrityError(
                f"item {award_item.item_id}",
                f"{award_item.supplier_name} has no eligible quote for item "
                f"{award_item.item_id}",
            )


def request_transition(
    demand: Demand,
    action: DemandAction,
    evidence: TransitionEvidence | None = None,
    *,
    now: datetime,
) -> DemandPatch:
    """Decide whether an action may be applied and what it changes.

    Args:
        demand: Current demand snapshot.
        action: Requested action.
        evidence: Operator-supplied evidence (reasons, items, award).
        now: Current instant from the caller's time authority.

    Returns:
        DemandPatch describing exactly the fields to persist.

    Raises:
        InvalidTransitionError: Action not legal from the current status.
        ValidationError: Required evidence missing.
        IntegrityError: Award does not fit the demand.
    """
    evidence = evidence or TransitionEvidence()
    log = logger.bind(
        demand_id=demand.id,
        action=action.value,
        from_status=demand.status.value,
    )

    ensure_transition_allowed(demand, action)
    target = ACTION_TRANSITIONS[action][1]

    if action is DemandAction.SUBMIT_FOR_REVIEW:
        _require_items(demand.items)
        _require_text(demand.title, "title", "A title is required")
        _require_text(demand.description, "description", "A description is required")
        patch = DemandPatch(demand_id=demand.id, action=action, status=target)

    elif action is DemandAction.ADJUST_ITEMS:
        patch = DemandPatch(
            demand_id=demand.id,
            action=action,
            status=target,
            items=_require_items(evidence.items),
        )

    elif action is DemandAction.REJECT:
        reason = _require_text(
            evidence.reason, "rejection_reason", "A rejection reason is required"
        )
        patch = DemandPatch(
            demand_id=demand.id,
            action=action,
            status=target,
            rejection_reason=reason,
        )

    elif action is DemandAction.APPROVE:
        items = _require_items(evidence.items) if evidence.items is not None else None
        if items is None:
            _require_items(demand.items)
        deadlines, computed = schedule_if_absent(demand, now)
        observations = (
            evidence.observations.strip()
            if evidence.observations and evidence.observations.strip()
            else None
        )
        patch = DemandPatch(
            demand_id=demand.id,
            action=action,
            status=target,
            proposal_deadline=deadlines.proposal_deadline if computed else None,
            delivery_deadline=deadlines.delivery_deadline if computed else None,
            approval_observations=observations,
            items=items,
        )

    elif action is DemandAction.CLOSE_BIDDING:
        reason = _require_text(
            evidence.reason, "closing_reason", "A closing reason is required"
        )
        kind = closing_kind(demand, now)
        patch = DemandPatch(
            demand_id=demand.id,
            action=action,
            status=target,
            status_reason=f"{kind.label}: {reason}",
            closing_kind=kind,
        )

    elif action is DemandAction.HOMOLOGATE:
        if evidence.award is None:
            raise ValidationError("award", "A resolved award is required to homologate")
        validate_award_for_demand(demand, evidence.award)
        patch = DemandPatch(
            demand_id=demand.id,
            action=action,
            status=target,
            award=evidence.award,
            decision_date=now,
        )

    elif action is DemandAction.FINALIZE:
        if not evidence.confirmed:
            raise ValidationError("confirmed", "Finalizing requires confirmation")
        patch = DemandPatch(demand_id=demand.id, action=action, status=target)

    else:
        # CLOSE and CANCEL
        reason = _require_text(evidence.reason, "reason", "A reason is required")
        patch = DemandPatch(
            demand_id=demand.id,
            action=action,
            status=target,
            status_reason=reason,
        )

    log.info("transition_decided", to_status=patch.status.value)
    return patch
