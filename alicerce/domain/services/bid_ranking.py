"""Blind-bidding anonymization and ranking.

Determinism:
- Aliases are assigned from the explicit submission sequence, never from
  price, so re-ranking by price never reshuffles identities.
- Ranking is a stable sort on the calculated total; ties keep submission
  order.
- Identical inputs always produce identical aliases, order and totals.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

import structlog

from alicerce.domain.models.bid_analysis import (
    AliasedProposal,
    BidAnalysis,
    Economicity,
    ItemComparison,
    ItemQuote,
)
from alicerce.domain.models.demand import Demand, Item, Proposal
from alicerce.domain.models.price_history import ItemReference
from alicerce.domain.services.price_history import last_price

logger = structlog.get_logger()

DEFAULT_ALIAS_PREFIX = "Bidder"
DEFAULT_ALIAS_WIDTH = 2

ZERO = Decimal("0")


def format_alias(position: int, prefix: str = DEFAULT_ALIAS_PREFIX, width: int = DEFAULT_ALIAS_WIDTH) -> str:
    """Render the alias for a 1-based submission position."""
    return f"{prefix} {str(position).zfill(width)}"


def calculate_total(proposal: Proposal, items: Sequence[Item]) -> Decimal:
    """Sum quantity x unit price over the proposal's quoted lines.

    Per-item declined lines and items the proposal did not quote add
    nothing. Lines for items outside the demand are ignored.
    """
    total = ZERO
    for item in items:
        unit_price = proposal.quoted_price_for(item.id)
        if unit_price is not None:
            total += unit_price * item.quantity
    return total


def _historical_total(
    items: Sequence[Item],
    reference_prices: dict[int, Decimal | None],
) -> Decimal:
    """Every demand item priced at its last paid price, 0 without history."""
    total = ZERO
    for item in items:
        historical = reference_prices.get(item.id)
        if historical is not None:
            total += historical * item.quantity
    return total


def _reference_prices(
    items: Sequence[Item],
    history_demands: Sequence[Demand],
) -> dict[int, Decimal | None]:
    if not history_demands:
        return {item.id: None for item in items}
    return {
        item.id: last_price(
            ItemReference(
                description=item.description,
                catalog_item_id=item.catalog_item_id,
            ),
            history_demands,
        )
        for item in items
    }


def compute_economicity(ranked: Sequence[AliasedProposal]) -> Economicity | None:
    """Advantage of the lowest ranked total over the highest.

    Defined only with at least two ranked proposals and a positive highest
    total.
    """
    if len(ranked) < 2:
        return None
    highest = ranked[-1].calculated_total
    lowest = ranked[0].calculated_total
    if highest == 0:
        return None
    diff = highest - lowest
    return Economicity(diff=diff, percent=diff / highest * 100)


def compare_items(
    items: Sequence[Item],
    ranked: Sequence[AliasedProposal],
) -> tuple[ItemComparison, ...]:
    """Build per-item comparisons of usable quotes, in ranking order."""
    comparisons: list[ItemComparison] = []
    for item in items:
        usable: list[tuple[AliasedProposal, Decimal]] = []
        for aliased in ranked:
            unit_price = aliased.proposal.quoted_price_for(item.id)
            if unit_price is not None:
                usable.append((aliased, unit_price))

        lowest = min((price for _, price in usable), default=None)
        quotes = tuple(
            ItemQuote(
                alias=aliased.alias,
                proposal_id=aliased.proposal_id,
                supplier_name=aliased.supplier_name,
                unit_price=price,
                total_value=price * item.quantity,
                brand=_brand_for(aliased.proposal, item.id),
                is_lowest=price == lowest,
            )
            for aliased, price in usable
        )
        comparisons.append(
            ItemComparison(item=item, quotes=quotes, lowest_unit_price=lowest)
        )
    return tuple(comparisons)


def _brand_for(proposal: Proposal, item_id: int) -> str | None:
    line = proposal.line_for(item_id)
    return line.brand if line is not None else None


def anonymize_proposals(
    proposals: Iterable[Proposal],
    items: Sequence[Item],
    alias_prefix: str = DEFAULT_ALIAS_PREFIX,
    alias_width: int = DEFAULT_ALIAS_WIDTH,
    reference_prices: dict[int, Decimal | None] | None = None,
) -> tuple[AliasedProposal, ...]:
    """Drop declined proposals and alias the rest in submission order."""
    prices = reference_prices or {}
    active = sorted(
        (p for p in proposals if not p.is_declined),
        key=lambda p: (p.sequence, p.id),
    )
    return tuple(
        AliasedProposal(
            alias=format_alias(position, alias_prefix, alias_width),
            proposal=proposal,
            calculated_total=calculate_total(proposal, items),
            historical_total=_historical_total(items, prices),
        )
        for position, proposal in enumerate(active, start=1)
    )


def analyze_bids(
    demand: Demand,
    history_demands: Iterable[Demand] = (),
    alias_prefix: str = DEFAULT_ALIAS_PREFIX,
    alias_width: int = DEFAULT_ALIAS_WIDTH,
) -> BidAnalysis:
    """Anonymize, total and rank a demand's proposals.

    Args:
        demand: Demand snapshot with items and proposals.
        history_demands: Demands mined for historical benchmarks. The
            analysed demand itself is skipped.
        alias_prefix: Alias prefix ("Bidder").
        alias_width: Alias number padding.

    Returns:
        A BidAnalysis. Historical totals are informational only and never
        influence ranking.
    """
    items = demand.items
    history = [d for d in history_demands if d.id != demand.id]
    reference_prices = _reference_prices(items, history)

    aliased = anonymize_proposals(
        demand.proposals,
        items,
        alias_prefix=alias_prefix,
        alias_width=alias_width,
        reference_prices=reference_prices,
    )
    # sorted() is stable: equal totals keep submission order
    ranked = tuple(sorted(aliased, key=lambda a: a.calculated_total))
    comparisons = compare_items(items, ranked)
    potential_mixed_total = sum((c.best_total for c in comparisons), ZERO)

    logger.debug(
        "bids_analyzed",
        demand_id=demand.id,
        proposals=len(demand.proposals),
        ranked=len(ranked),
        declined=len(demand.proposals) - len(aliased),
    )

    return BidAnalysis(
        demand_id=demand.id,
        items=items,
        aliased_proposals=aliased,
        ranked_proposals=ranked,
        economicity=compute_economicity(ranked),
        item_comparisons=comparisons,
        potential_mixed_total=potential_mixed_total,
    )
