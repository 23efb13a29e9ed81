"""Factories for engine test data.

Prices are given as strings or Decimals; None marks a declined line.

Example:
    items = (make_item(1, quantity=10), make_item(2, quantity=5))
    proposal = make_proposal(10, 1, "Acme", {1: "12.50", 2: None})
    demand = make_demand(items=items, proposals=(proposal,),
                         status=DemandStatus.UNDER_ANALYSIS)
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from alicerce.domain.models.demand import (
    Award,
    Demand,
    DemandStatus,
    Item,
    ItemType,
    LineDeclined,
    Priority,
    Proposal,
    ProposalItem,
    ProposalStanding,
    Quoted,
)

CREATED_AT = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
PROPOSAL_DEADLINE = datetime(2024, 3, 6, 23, 59, 59, tzinfo=timezone.utc)
DELIVERY_DEADLINE = datetime(2024, 3, 11, 23, 59, 59, tzinfo=timezone.utc)


def make_item(
    item_id: int,
    description: str | None = None,
    quantity: int = 1,
    unit: str = "un",
    catalog_item_id: str | None = None,
) -> Item:
    return Item(
        id=item_id,
        description=description or f"Item {item_id}",
        unit=unit,
        quantity=quantity,
        catalog_item_id=catalog_item_id,
    )


def make_proposal(
    proposal_id: int,
    sequence: int,
    supplier_name: str,
    prices: Mapping[int, str | Decimal | None],
    *,
    declined: bool = False,
    delivery_time: str = "",
    submitted_at: datetime | None = None,
    brands: Mapping[int, str] | None = None,
) -> Proposal:
    """Build a proposal; a None price becomes a per-item declined line."""
    lines = tuple(
        ProposalItem(
            item_id=item_id,
            quote=LineDeclined() if price is None else Quoted(unit_price=Decimal(price)),
            brand=(brands or {}).get(item_id),
        )
        for item_id, price in prices.items()
    )
    return Proposal(
        id=proposal_id,
        sequence=sequence,
        protocol=f"PROP-{proposal_id:04d}",
        supplier_id=proposal_id * 100,
        supplier_name=supplier_name,
        submitted_at=submitted_at or CREATED_AT + timedelta(days=1, minutes=sequence),
        delivery_time=delivery_time,
        items=lines,
        standing=ProposalStanding.DECLINED if declined else ProposalStanding.ACTIVE,
    )


def make_demand(
    demand_id: int = 1,
    *,
    status: DemandStatus = DemandStatus.DRAFT,
    items: tuple[Item, ...] | None = None,
    proposals: tuple[Proposal, ...] = (),
    award: Award | None = None,
    item_type: ItemType = ItemType.MATERIALS,
    priority: Priority = Priority.MEDIUM,
    title: str = "Office supplies",
    description: str = "Quarterly office supplies",
    protocol: str | None = None,
    created_at: datetime = CREATED_AT,
    decision_date: datetime | None = None,
    scheduled: bool | None = None,
) -> Demand:
    """Build a demand.

    Deadlines are filled in whenever the status requires them, or when
    scheduled=True is passed explicitly.
    """
    if scheduled is None:
        scheduled = status.requires_deadlines()
    return Demand(
        id=demand_id,
        protocol=protocol or f"DEM-{demand_id:04d}",
        title=title,
        requesting_department="Health",
        item_type=item_type,
        priority=priority,
        description=description,
        created_at=created_at,
        items=items if items is not None else (make_item(1, quantity=2),),
        status=status,
        proposals=proposals,
        award=award,
        proposal_deadline=PROPOSAL_DEADLINE if scheduled else None,
        delivery_deadline=DELIVERY_DEADLINE if scheduled else None,
        decision_date=decision_date,
    )
