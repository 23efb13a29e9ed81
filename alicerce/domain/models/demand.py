"""Demand domain model for the municipal bidding lifecycle.

A demand is a purchase or service request raised by a municipal department.
It moves from draft, through warehouse review, into a competitive bidding
round, to sealed-bid analysis, to an award (homologation) and closure.

Invariants:
- Proposal and delivery deadlines are either both set or both absent.
- Once a demand leaves the pre-approval states its deadlines are set.
- An Award is immutable; it is only ever replaced by a new homologation.
- Proposals carry an explicit submission sequence; aliases derive from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ItemType(str, Enum):
    """Kind of goods requested by a demand."""

    MATERIALS = "Materials"
    SERVICES = "Services"


class Priority(str, Enum):
    """Urgency of a demand; drives deadline computation."""

    LOW = "Low"
    MEDIUM = "Medium"
    URGENT = "Urgent"


class DemandStatus(str, Enum):
    """State in the demand lifecycle.

    State Machine:
        DRAFT -> PENDING_WAREHOUSE_REVIEW (submitted by requester)
        PENDING_WAREHOUSE_REVIEW -> OPEN_FOR_BIDDING (approve & publish)
        PENDING_WAREHOUSE_REVIEW -> REJECTED (warehouse rejection)
        OPEN_FOR_BIDDING -> UNDER_ANALYSIS (bidding closed)
        UNDER_ANALYSIS -> AWARD_DEFINED (homologation)
        UNDER_ANALYSIS -> CLOSED (closed without award)
        AWARD_DEFINED -> COMPLETED (administrative finalize)
        AWARD_DEFINED -> CLOSED (administrative closure)
        DRAFT..UNDER_ANALYSIS -> CANCELLED

    Terminal States:
        COMPLETED, CLOSED, REJECTED, CANCELLED.
    """

    DRAFT = "Draft"
    PENDING_WAREHOUSE_REVIEW = "PendingWarehouseReview"
    OPEN_FOR_BIDDING = "OpenForBidding"
    UNDER_ANALYSIS = "UnderAnalysis"
    AWARD_DEFINED = "AwardDefined"
    COMPLETED = "Completed"
    CLOSED = "Closed"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"

    def is_terminal(self) -> bool:
        """Check if no further transitions are permitted from this state."""
        return self in TERMINAL_STATUSES

    def requires_deadlines(self) -> bool:
        """Check if a demand in this state must carry both deadlines."""
        return self not in UNSCHEDULED_STATUSES


TERMINAL_STATUSES: frozenset[DemandStatus] = frozenset(
    {
        DemandStatus.COMPLETED,
        DemandStatus.CLOSED,
        DemandStatus.REJECTED,
        DemandStatus.CANCELLED,
    }
)

# States a demand may be in without deadlines. REJECTED and CANCELLED are
# reachable before approval, so they may or may not carry deadlines.
UNSCHEDULED_STATUSES: frozenset[DemandStatus] = frozenset(
    {
        DemandStatus.DRAFT,
        DemandStatus.PENDING_WAREHOUSE_REVIEW,
        DemandStatus.REJECTED,
        DemandStatus.CANCELLED,
    }
)

# Statuses whose demands may carry a winner worth mining for prices.
AWARDED_STATUSES: frozenset[DemandStatus] = frozenset(
    {DemandStatus.AWARD_DEFINED, DemandStatus.COMPLETED}
)


@dataclass(frozen=True, eq=True)
class Item:
    """A line item requested by a demand.

    Attributes:
        id: Item identifier, unique within the demand.
        description: Free-text description of the goods or service.
        unit: Unit of measure (un, kg, m, ...).
        quantity: Requested quantity (positive integer).
        group_id: Supplier group the item belongs to.
        catalog_item_id: Optional catalog reference used for price history.
    """

    id: int
    description: str
    unit: str
    quantity: int
    group_id: str = ""
    catalog_item_id: str | None = None

    def __post_init__(self) -> None:
        """Validate item fields."""
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"Item {self.id} quantity must be an integer")
        if self.quantity < 1:
            raise ValueError(
                f"Item {self.id} quantity must be positive, got {self.quantity}"
            )


class ProposalStanding(str, Enum):
    """Whole-proposal participation variant.

    A DECLINED proposal is a supplier's statement of non-participation. It is
    excluded from ranking and from price history.
    """

    ACTIVE = "Active"
    DECLINED = "Declined"


@dataclass(frozen=True, eq=True)
class Quoted:
    """A priced proposal line."""

    unit_price: Decimal

    def __post_init__(self) -> None:
        if self.unit_price < 0:
            raise ValueError(f"unit_price must be non-negative, got {self.unit_price}")


@dataclass(frozen=True, eq=True)
class LineDeclined:
    """A proposal line the supplier chose not to price."""


LineQuote = Quoted | LineDeclined


@dataclass(frozen=True, eq=True)
class ProposalItem:
    """One supplier line against a demand item.

    Attributes:
        item_id: Identifier of the demand Item being quoted.
        quote: Quoted(unit_price) or LineDeclined().
        brand: Optional brand offered.
    """

    item_id: int
    quote: LineQuote
    brand: str | None = None

    @property
    def is_declined(self) -> bool:
        return isinstance(self.quote, LineDeclined)

    @property
    def unit_price(self) -> Decimal | None:
        """Quoted unit price, or None for a declined line."""
        if isinstance(self.quote, Quoted):
            return self.quote.unit_price
        return None


@dataclass(frozen=True, eq=True)
class Proposal:
    """A supplier's bid against a demand.

    Attributes:
        id: External proposal identifier.
        sequence: Monotonically increasing submission number within the
            demand. Bidder aliases are assigned in this order.
        protocol: Submission protocol string.
        supplier_id: Supplier identifier.
        supplier_name: Denormalized supplier name.
        submitted_at: Submission timestamp.
        delivery_time: Delivery-time descriptor given by the supplier.
        items: Proposal lines.
        observations: Optional free-text observations.
        standing: ACTIVE or DECLINED (whole-proposal decline).
    """

    id: int
    sequence: int
    protocol: str
    supplier_id: int
    supplier_name: str
    submitted_at: datetime
    delivery_time: str = ""
    items: tuple[ProposalItem, ...] = field(default_factory=tuple)
    observations: str | None = None
    standing: ProposalStanding = ProposalStanding.ACTIVE

    @property
    def is_declined(self) -> bool:
        return self.standing is ProposalStanding.DECLINED

    def line_for(self, item_id: int) -> ProposalItem | None:
        """Return the first line quoting the given item, if any."""
        for line in self.items:
            if line.item_id == item_id:
                return line
        return None

    def quoted_price_for(self, item_id: int) -> Decimal | None:
        """Return the usable unit price for an item, or None.

        None when the proposal has no line for the item or declined it.
        """
        line = self.line_for(item_id)
        if line is None:
            return None
        return line.unit_price


class AwardMode(str, Enum):
    """How the demand was awarded."""

    GLOBAL = "global"
    ITEM = "item"


@dataclass(frozen=True, eq=True)
class AwardItem:
    """Per-item winner record of an item-mode award."""

    item_id: int
    supplier_name: str
    unit_price: Decimal
    quantity: int
    total_value: Decimal


@dataclass(frozen=True, eq=True)
class Award:
    """The homologated winner(s) of a demand.

    Attributes:
        mode: GLOBAL (single supplier) or ITEM (winner per item).
        justification: Technical justification for the decision.
        total_value: Awarded total.
        supplier_name: Winning supplier (global mode only).
        items: Per-item winners (item mode only).
    """

    mode: AwardMode
    justification: str
    total_value: Decimal
    supplier_name: str | None = None
    items: tuple[AwardItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate mode-specific shape."""
        if self.mode is AwardMode.GLOBAL:
            if not self.supplier_name:
                raise ValueError("Global award requires a supplier_name")
            if self.items:
                raise ValueError("Global award must not carry per-item winners")
        else:
            if not self.items:
                raise ValueError("Item award requires at least one item winner")
            if self.supplier_name is not None:
                raise ValueError("Item award must not carry a global supplier_name")

    def winner_names(self) -> tuple[str, ...]:
        """Distinct winning supplier names, in award order."""
        if self.mode is AwardMode.GLOBAL:
            return (self.supplier_name or "",)
        seen: dict[str, None] = {}
        for award_item in self.items:
            seen.setdefault(award_item.supplier_name, None)
        return tuple(seen)


@dataclass(frozen=True, eq=True)
class Demand:
    """A purchase or service request moving through the bidding lifecycle.

    Attributes:
        id: Demand identifier.
        protocol: Protocol string shown to users.
        title: Short title.
        requesting_department: Department that raised the demand.
        item_type: MATERIALS or SERVICES.
        priority: LOW, MEDIUM or URGENT.
        description: Free-text description of the request.
        items: Ordered requested items.
        status: Current lifecycle status.
        proposals: Submitted proposals.
        award: Homologated award, if any.
        proposal_deadline: End of the bidding window.
        delivery_deadline: Expected delivery date.
        created_at: Creation timestamp.
        decision_date: Homologation timestamp.
        rejection_reason: Reason recorded on warehouse rejection.
        approval_observations: Operator notes attached on approval.
        status_reason: Audit text of the last close/cancel action.
    """

    id: int
    protocol: str
    title: str
    requesting_department: str
    item_type: ItemType
    priority: Priority
    description: str
    created_at: datetime
    items: tuple[Item, ...] = field(default_factory=tuple)
    status: DemandStatus = DemandStatus.DRAFT
    proposals: tuple[Proposal, ...] = field(default_factory=tuple)
    award: Award | None = None
    proposal_deadline: datetime | None = None
    delivery_deadline: datetime | None = None
    decision_date: datetime | None = None
    rejection_reason: str | None = None
    approval_observations: str | None = None
    status_reason: str | None = None

    def __post_init__(self) -> None:
        """Validate deadline invariants."""
        has_proposal = self.proposal_deadline is not None
        has_delivery = self.delivery_deadline is not None
        if has_proposal != has_delivery:
            raise ValueError(
                f"Demand {self.id}: deadlines must be both set or both absent"
            )
        if self.status.requires_deadlines() and not has_proposal:
            raise ValueError(
                f"Demand {self.id}: status {self.status.value} requires deadlines"
            )

    @property
    def has_deadlines(self) -> bool:
        return self.proposal_deadline is not None

    def item_by_id(self, item_id: int) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def active_proposals(self) -> tuple[Proposal, ...]:
        """Proposals that were not declined as a whole."""
        return tuple(p for p in self.proposals if not p.is_declined)
