"""Price history miner.

Scans awarded demands and extracts the unit prices historically paid for
an item, most recent first. Only demands in AWARD_DEFINED or COMPLETED that
carry an award are considered; nothing is synthesized for demands without
a winner.

Matching:
- Item-mode awards match against their per-item winner records.
- Global-mode awards resolve the price from the winning supplier's
  proposal line for the matching item.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from alicerce.domain.models.demand import AWARDED_STATUSES, AwardMode, Demand
from alicerce.domain.models.price_history import (
    ItemReference,
    PriceHistoryEntry,
    PriceHistorySummary,
)

DEFAULT_RECENT_WINDOW = 3


def _entries_for_demand(
    item_ref: ItemReference,
    demand: Demand,
) -> list[PriceHistoryEntry]:
    award = demand.award
    if award is None or demand.status not in AWARDED_STATUSES:
        return []

    dated_at = demand.decision_date or demand.created_at
    entries: list[PriceHistoryEntry] = []

    if award.mode is AwardMode.ITEM:
        for award_item in award.items:
            item = demand.item_by_id(award_item.item_id)
            if item is None or not item_ref.matches(item.description, item.catalog_item_id):
                continue
            entries.append(
                PriceHistoryEntry(
                    date=dated_at,
                    supplier_name=award_item.supplier_name,
                    unit_price=award_item.unit_price,
                    protocol=demand.protocol,
                )
            )
        return entries

    item = next(
        (i for i in demand.items if item_ref.matches(i.description, i.catalog_item_id)),
        None,
    )
    if item is None:
        return entries

    winning = next(
        (
            p
            for p in demand.active_proposals()
            if p.supplier_name == award.supplier_name
        ),
        None,
    )
    if winning is None:
        return entries

    unit_price = winning.quoted_price_for(item.id)
    if unit_price is not None:
        entries.append(
            PriceHistoryEntry(
                date=dated_at,
                supplier_name=award.supplier_name or winning.supplier_name,
                unit_price=unit_price,
                protocol=demand.protocol,
            )
        )
    return entries


def price_history(
    item_ref: ItemReference,
    demands: Iterable[Demand],
) -> list[PriceHistoryEntry]:
    """Collect the historically paid unit prices of an item.

    Args:
        item_ref: Target item (catalog id preferred, else description).
        demands: All known demands.

    Returns:
        Entries sorted most recent first. Entries sharing a date keep the
        order in which their demands were supplied.
    """
    matches: list[PriceHistoryEntry] = []
    for demand in demands:
        matches.extend(_entries_for_demand(item_ref, demand))
    return sorted(matches, key=lambda entry: entry.date, reverse=True)


def _mean(prices: Sequence[Decimal]) -> Decimal:
    return sum(prices, Decimal("0")) / len(prices)


def summarize_price_history(
    entries: Sequence[PriceHistoryEntry],
    recent_window: int = DEFAULT_RECENT_WINDOW,
) -> PriceHistorySummary:
    """Derive last value and averages from a most-recent-first history.

    Args:
        entries: Output of price_history().
        recent_window: How many of the most recent entries form the recent
            average.

    Returns:
        Summary with all values None when there is no history.
    """
    if recent_window < 1:
        raise ValueError(f"recent_window must be positive, got {recent_window}")
    if not entries:
        return PriceHistorySummary(
            last_value=None, average_all=None, average_recent=None, count=0
        )

    prices = [entry.unit_price for entry in entries]
    return PriceHistorySummary(
        last_value=prices[0],
        average_all=_mean(prices),
        average_recent=_mean(prices[:recent_window]),
        count=len(prices),
    )


def last_price(item_ref: ItemReference, demands: Iterable[Demand]) -> Decimal | None:
    """Most recent historically paid unit price, or None."""
    history = price_history(item_ref, demands)
    return history[0].unit_price if history else None


def price_series(entries: Sequence[PriceHistoryEntry]) -> list[PriceHistoryEntry]:
    """Chronological (oldest first) view of a history, for charting."""
    return list(reversed(entries))
