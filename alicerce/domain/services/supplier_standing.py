"""Supplier participation standing across demands."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from alicerce.domain.models.demand import (
    AWARDED_STATUSES,
    AwardMode,
    Demand,
    DemandStatus,
)

PENDING_STATUSES: frozenset[DemandStatus] = frozenset(
    {
        DemandStatus.PENDING_WAREHOUSE_REVIEW,
        DemandStatus.OPEN_FOR_BIDDING,
        DemandStatus.UNDER_ANALYSIS,
    }
)


@dataclass(frozen=True, eq=True)
class SupplierStanding:
    """Outcome counts of a supplier's non-declined participations.

    Attributes:
        supplier_name: Supplier summarized.
        won: Awarded demands where the supplier won (all or some items).
        lost: Awarded demands where the supplier won nothing.
        pending: Demands still being decided.
        awarded_value: Sum of the values awarded to the supplier.
    """

    supplier_name: str
    won: int = 0
    lost: int = 0
    pending: int = 0
    awarded_value: Decimal = Decimal("0")

    @property
    def participations(self) -> int:
        return self.won + self.lost + self.pending


def _awarded_to(demand: Demand, supplier_name: str) -> Decimal | None:
    award = demand.award
    if award is None:
        return None
    if award.mode is AwardMode.GLOBAL:
        return award.total_value if award.supplier_name == supplier_name else None
    won_items = [ai for ai in award.items if ai.supplier_name == supplier_name]
    if not won_items:
        return None
    return sum((ai.total_value for ai in won_items), Decimal("0"))


def supplier_standing(supplier_name: str, demands: Iterable[Demand]) -> SupplierStanding:
    """Summarize how a supplier fared in the demands it bid on."""
    won = lost = pending = 0
    awarded_value = Decimal("0")

    for demand in demands:
        participated = any(
            p.supplier_name == supplier_name for p in demand.active_proposals()
        )
        if not participated:
            continue
        if demand.status in AWARDED_STATUSES:
            value = _awarded_to(demand, supplier_name)
            if value is None:
                lost += 1
            else:
                won += 1
                awarded_value += value
        elif demand.status in PENDING_STATUSES:
            pending += 1

    return SupplierStanding(
        supplier_name=supplier_name,
        won=won,
        lost=lost,
        pending=pending,
        awarded_value=awarded_value,
    )
