"""Bidder identity disclosure policy.

During the blind phase (bidding open and under analysis) suppliers are
only ever shown by alias. Homologation ends the blind phase: from then on
the winning identity may be disclosed to any viewer, including the public
transparency view.
"""

from __future__ import annotations

from alicerce.domain.models.demand import Demand, DemandStatus, Proposal

BLIND_STATUSES: frozenset[DemandStatus] = frozenset(
    {DemandStatus.OPEN_FOR_BIDDING, DemandStatus.UNDER_ANALYSIS}
)


def is_blind_phase(status: DemandStatus) -> bool:
    return status in BLIND_STATUSES


def bidder_label(proposal: Proposal, alias: str, status: DemandStatus) -> str:
    """Name to show for a bidder given the demand status."""
    if is_blind_phase(status):
        return alias
    return proposal.supplier_name


def public_details_visible(demand: Demand) -> bool:
    """Whether public viewers may see proposals and winner details.

    Sensitive data (proposal list, per-item prices, approval notes) is
    only published once the demand has a homologated award.
    """
    return demand.award is not None and not is_blind_phase(demand.status)
