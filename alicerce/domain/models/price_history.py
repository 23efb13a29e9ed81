"""Price history models mined from awarded demands.

These are derived values; they are never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True, eq=True)
class ItemReference:
    """Identifies an item across demands.

    Matching prefers the catalog reference; without one, descriptions are
    compared case-insensitively.
    """

    description: str
    catalog_item_id: str | None = None

    def matches(self, description: str, catalog_item_id: str | None) -> bool:
        if self.catalog_item_id:
            return catalog_item_id == self.catalog_item_id
        return description.lower() == self.description.lower()


@dataclass(frozen=True, eq=True)
class PriceHistoryEntry:
    """One historically paid unit price for an item."""

    date: datetime
    supplier_name: str
    unit_price: Decimal
    protocol: str


@dataclass(frozen=True, eq=True)
class PriceHistorySummary:
    """Benchmarks derived from a most-recent-first price history.

    Attributes:
        last_value: Price of the most recent entry.
        average_all: Mean of all entries.
        average_recent: Mean of up to the N most recent entries.
        count: Number of entries summarized.
    """

    last_value: Decimal | None
    average_all: Decimal | None
    average_recent: Decimal | None
    count: int = 0
