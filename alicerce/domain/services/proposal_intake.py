"""Proposal intake helpers.

Builds whole-decline proposals and checks that a submitted proposal
carries at least one priced line for an item of the demand. Duplicate
submissions per supplier are the caller's concern.
"""

from __future__ import annotations

from datetime import datetime

from alicerce.domain.errors.procurement import IntegrityError, ValidationError
from alicerce.domain.models.demand import (
    Demand,
    LineDeclined,
    Proposal,
    ProposalItem,
    ProposalStanding,
)

DECLINE_DELIVERY = "N/A"


def build_decline_proposal(
    demand: Demand,
    proposal_id: int,
    sequence: int,
    supplier_id: int,
    supplier_name: str,
    submitted_at: datetime,
    observations: str | None = None,
) -> Proposal:
    """Record a supplier's non-participation in a demand."""
    return Proposal(
        id=proposal_id,
        sequence=sequence,
        protocol=f"DEC-{str(proposal_id)[-4:].zfill(4)}",
        supplier_id=supplier_id,
        supplier_name=supplier_name,
        submitted_at=submitted_at,
        delivery_time=DECLINE_DELIVERY,
        items=tuple(ProposalItem(item_id=item.id, quote=LineDeclined()) for item in demand.items),
        observations=observations,
        standing=ProposalStanding.DECLINED,
    )


def validate_proposal_submission(demand: Demand, proposal: Proposal) -> None:
    """Check an incoming proposal before the caller appends it.

    Raises:
        IntegrityError: A line references an item outside the demand.
        ValidationError: An active proposal prices no item.
    """
    for line in proposal.items:
        if demand.item_by_id(line.item_id) is None:
            raise IntegrityError(
                f"item {line.item_id}",
                f"Item {line.item_id} does not belong to demand {demand.id}",
            )
    if proposal.is_declined:
        return
    if not any(
        line.unit_price is not None and line.unit_price > 0 for line in proposal.items
    ):
        raise ValidationError("items", "A proposal must price at least one item")
