"""Award resolution engine.

Turns a bid analysis plus an operator selection into a single immutable
Award, and offers a templated (non-binding) justification.

Validation order:
1. An empty justification is always a ValidationError, whatever the
   selection.
2. A missing winner (global) or zero selected items (item) is a
   ValidationError.
3. A selection pointing at an unknown item, a proposal outside the
   ranking, or a line the proposal declined or never quoted is an
   IntegrityError. Declined lines can never win.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from alicerce.domain.errors.procurement import IntegrityError, ValidationError
from alicerce.domain.models.bid_analysis import AliasedProposal, BidAnalysis
from alicerce.domain.models.demand import Award, AwardItem, AwardMode, Item
from alicerce.domain.models.selection import (
    AwardSelection,
    GlobalSelection,
    ItemSelection,
)

logger = structlog.get_logger()

DEFAULT_CURRENCY_SYMBOL = "R$"


def format_amount(value: Decimal, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Render an amount with two decimals and thousands separators."""
    return f"{currency_symbol} {value:,.2f}"


def _require_justification(justification: str | None) -> str:
    if justification is None or not justification.strip():
        raise ValidationError(
            "justification", "A technical justification is required to homologate"
        )
    return justification.strip()


def _ranked_proposal(analysis: BidAnalysis, proposal_id: int) -> AliasedProposal:
    aliased = analysis.ranked_by_id(proposal_id)
    if aliased is None:
        raise IntegrityError(
            f"proposal {proposal_id}",
            f"Proposal {proposal_id} is not an eligible bid for demand "
            f"{analysis.demand_id}",
        )
    return aliased


def _item(analysis: BidAnalysis, item_id: int) -> Item:
    for item in analysis.items:
        if item.id == item_id:
            return item
    raise IntegrityError(
        f"item {item_id}",
        f"Item {item_id} does not belong to demand {analysis.demand_id}",
    )


def _resolve_global(
    analysis: BidAnalysis,
    selection: GlobalSelection,
    justification: str,
) -> Award:
    if selection.proposal_id is None:
        raise ValidationError("winner", "A winning proposal must be selected")
    winner = _ranked_proposal(analysis, selection.proposal_id)
    return Award(
        mode=AwardMode.GLOBAL,
        justification=justification,
        total_value=winner.calculated_total,
        supplier_name=winner.supplier_name,
    )


def _resolve_items(
    analysis: BidAnalysis,
    selection: ItemSelection,
    justification: str,
) -> Award:
    if not selection.winners:
        raise ValidationError("winners", "At least one item winner must be selected")

    # Validate every selection before building anything
    chosen: dict[int, AwardItem] = {}
    for item_id, proposal_id in selection.winners.items():
        item = _item(analysis, item_id)
        winner = _ranked_proposal(analysis, proposal_id)
        line = winner.proposal.line_for(item_id)
        if line is None or line.unit_price is None:
            reason = "declined" if line is not None else "did not quote"
            raise IntegrityError(
                f"item {item_id}",
                f"{winner.alias} {reason} item {item_id} and cannot win it",
            )
        chosen[item_id] = AwardItem(
            item_id=item_id,
            supplier_name=winner.supplier_name,
            unit_price=line.unit_price,
            quantity=item.quantity,
            total_value=line.unit_price * item.quantity,
        )

    award_items = tuple(chosen[item.id] for item in analysis.items if item.id in chosen)
    return Award(
        mode=AwardMode.ITEM,
        justification=justification,
        total_value=sum((ai.total_value for ai in award_items), Decimal("0")),
        items=award_items,
    )


def resolve_award(
    analysis: BidAnalysis,
    selection: AwardSelection,
    justification: str | None,
) -> Award:
    """Resolve an operator selection into an Award.

    Args:
        analysis: Output of analyze_bids() for the demand.
        selection: GlobalSelection or ItemSelection.
        justification: Operator justification text.

    Returns:
        The validated Award.

    Raises:
        ValidationError: Justification or winner selection missing.
        IntegrityError: Selection references an ineligible bid or item.
    """
    text = _require_justification(justification)
    if isinstance(selection, GlobalSelection):
        award = _resolve_global(analysis, selection, text)
    else:
        award = _resolve_items(analysis, selection, text)

    logger.debug(
        "award_resolved",
        demand_id=analysis.demand_id,
        mode=award.mode.value,
        total_value=str(award.total_value),
        winners=len(award.winner_names()),
    )
    return award


def suggest_justification(
    analysis: BidAnalysis,
    selection: AwardSelection,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str | None:
    """Templated justification for the current selection.

    The suggestion is recomputed from the selection alone; whether an
    operator's manual edits should survive a selection change is left to
    the caller.

    Returns:
        Suggested text, or None when nothing usable is selected.
    """
    if isinstance(selection, GlobalSelection):
        if selection.proposal_id is None:
            return None
        winner = analysis.ranked_by_id(selection.proposal_id)
        if winner is None:
            return None
        return (
            "The proposal with the lowest global value "
            f"({format_amount(winner.calculated_total, currency_symbol)}) is "
            "declared the winner, meeting all technical requirements and "
            "deadlines set out in the notice."
        )

    valid: list[tuple[str, Decimal]] = []
    for item_id, proposal_id in selection.winners.items():
        comparison = analysis.comparison_for(item_id)
        quote = comparison.quote_for(proposal_id) if comparison else None
        if quote is not None:
            valid.append((quote.supplier_name, quote.total_value))
    if not valid:
        return None

    total = sum((value for _, value in valid), Decimal("0"))
    suppliers = len({name for name, _ in valid})
    return (
        f"Award by lowest price per item: {len(valid)} item(s) awarded to "
        f"{suppliers} distinct supplier(s), totalling "
        f"{format_amount(total, currency_symbol)}, meeting all technical "
        "requirements set out in the notice."
    )
