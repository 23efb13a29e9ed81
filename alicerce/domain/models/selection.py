"""Operator selections consumed by award resolution.

Selections are caller-owned values. The engine never keeps selection
state between calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class GlobalSelection:
    """A single winning proposal for the whole demand.

    Attributes:
        proposal_id: Selected proposal, or None when nothing is selected yet.
    """

    proposal_id: int | None = None


@dataclass(frozen=True)
class ItemSelection:
    """Winning proposal chosen independently per item.

    Attributes:
        winners: Maps demand item id to the selected proposal id. Items
            without a winner are simply absent.
    """

    winners: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "winners", MappingProxyType(dict(self.winners)))

    def with_winner(self, item_id: int, proposal_id: int) -> ItemSelection:
        """Return a new selection with one item's winner set or replaced."""
        updated = dict(self.winners)
        updated[item_id] = proposal_id
        return ItemSelection(winners=updated)

    def without(self, item_id: int) -> ItemSelection:
        updated = dict(self.winners)
        updated.pop(item_id, None)
        return ItemSelection(winners=updated)


AwardSelection = GlobalSelection | ItemSelection
