"""Per-item price view of a demand.

After homologation every awarded item shows the winning unit price and the
winner's delivery descriptor. Before that, once bidding has closed, each
item shows the best positive quote received.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from alicerce.domain.models.demand import AwardMode, Demand, DemandStatus, Proposal

DEFAULT_DELIVERY = "As per notice"


@dataclass(frozen=True, eq=True)
class ItemPrice:
    """Price shown for one demand item."""

    item_id: int
    unit_price: Decimal
    delivery_time: str

    def total_for(self, quantity: int) -> Decimal:
        return self.unit_price * quantity


def _delivery_of(proposal: Proposal | None) -> str:
    if proposal is None or not proposal.delivery_time:
        return DEFAULT_DELIVERY
    return proposal.delivery_time


def resolve_item_prices(demand: Demand) -> dict[int, ItemPrice]:
    """Map item id to the price shown for it.

    Returns:
        Awarded prices when the demand has an award; best positive quotes
        when bidding is no longer open; otherwise an empty mapping.
    """
    award = demand.award
    by_supplier = {p.supplier_name: p for p in demand.active_proposals()}
    prices: dict[int, ItemPrice] = {}

    if award is not None:
        if award.mode is AwardMode.ITEM:
            for award_item in award.items:
                prices[award_item.item_id] = ItemPrice(
                    item_id=award_item.item_id,
                    unit_price=award_item.unit_price,
                    delivery_time=_delivery_of(by_supplier.get(award_item.supplier_name)),
                )
            return prices

        winning = by_supplier.get(award.supplier_name or "")
        if winning is None:
            return prices
        for item in demand.items:
            unit_price = winning.quoted_price_for(item.id)
            if unit_price is not None:
                prices[item.id] = ItemPrice(
                    item_id=item.id,
                    unit_price=unit_price,
                    delivery_time=_delivery_of(winning),
                )
        return prices

    if demand.status in (DemandStatus.DRAFT, DemandStatus.PENDING_WAREHOUSE_REVIEW, DemandStatus.OPEN_FOR_BIDDING):
        return prices

    for item in demand.items:
        best: tuple[Decimal, Proposal] | None = None
        for proposal in demand.active_proposals():
            unit_price = proposal.quoted_price_for(item.id)
            if unit_price is None or unit_price <= 0:
                continue
            if best is None or unit_price < best[0]:
                best = (unit_price, proposal)
        if best is not None:
            prices[item.id] = ItemPrice(
                item_id=item.id,
                unit_price=best[0],
                delivery_time=_delivery_of(best[1]),
            )
    return prices
