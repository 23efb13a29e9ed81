"""Blind-bidding analysis models.

The analysis view is what an operator sees before homologation: proposals
hidden behind stable aliases, ranked by price, with item-level comparisons.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from alicerce.domain.models.demand import Item, Proposal


@dataclass(frozen=True, eq=True)
class AliasedProposal:
    """A non-declined proposal hidden behind a bidder alias.

    Attributes:
        alias: Stable alias ("Bidder 01", ...) assigned in submission order.
        proposal: The underlying proposal.
        calculated_total: Sum of quantity x unit price over quoted lines.
        historical_total: Every demand item priced at its last paid price.
    """

    alias: str
    proposal: Proposal
    calculated_total: Decimal
    historical_total: Decimal = Decimal("0")

    @property
    def proposal_id(self) -> int:
        return self.proposal.id

    @property
    def supplier_name(self) -> str:
        return self.proposal.supplier_name


@dataclass(frozen=True, eq=True)
class Economicity:
    """Price advantage of the lowest ranked total over the highest."""

    diff: Decimal
    percent: Decimal


@dataclass(frozen=True, eq=True)
class ItemQuote:
    """One bidder's usable price for one item."""

    alias: str
    proposal_id: int
    supplier_name: str
    unit_price: Decimal
    total_value: Decimal
    brand: str | None = None
    is_lowest: bool = False


@dataclass(frozen=True, eq=True)
class ItemComparison:
    """Side-by-side usable quotes for a single demand item.

    Quotes follow ranking order. Per-item declined lines never appear.
    """

    item: Item
    quotes: tuple[ItemQuote, ...] = field(default_factory=tuple)
    lowest_unit_price: Decimal | None = None

    @property
    def best_total(self) -> Decimal:
        if self.lowest_unit_price is None:
            return Decimal("0")
        return self.lowest_unit_price * self.item.quantity

    def quote_for(self, proposal_id: int) -> ItemQuote | None:
        for quote in self.quotes:
            if quote.proposal_id == proposal_id:
                return quote
        return None


@dataclass(frozen=True, eq=True)
class BidAnalysis:
    """Deterministic analysis of a demand's proposals.

    Attributes:
        demand_id: Analysed demand.
        items: Demand items, in demand order.
        aliased_proposals: Non-declined proposals in submission order.
        ranked_proposals: Same proposals, ascending by calculated total.
        economicity: Lowest vs highest total advantage, when defined.
        item_comparisons: One comparison per demand item.
        potential_mixed_total: Best achievable total of a per-item award.
    """

    demand_id: int
    items: tuple[Item, ...]
    aliased_proposals: tuple[AliasedProposal, ...]
    ranked_proposals: tuple[AliasedProposal, ...]
    economicity: Economicity | None
    item_comparisons: tuple[ItemComparison, ...]
    potential_mixed_total: Decimal

    def ranked_by_id(self, proposal_id: int) -> AliasedProposal | None:
        for aliased in self.ranked_proposals:
            if aliased.proposal_id == proposal_id:
                return aliased
        return None

    def comparison_for(self, item_id: int) -> ItemComparison | None:
        for comparison in self.item_comparisons:
            if comparison.item.id == item_id:
                return comparison
        return None

    @property
    def lowest(self) -> AliasedProposal | None:
        return self.ranked_proposals[0] if self.ranked_proposals else None
