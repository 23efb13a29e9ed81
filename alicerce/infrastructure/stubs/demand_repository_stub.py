"""Demand repository stub.

In-memory implementation of DemandReaderProtocol and
DemandPatchWriterProtocol for tests and local tooling.

This stub is NOT production-ready. Replace with an adapter for the real
demand store.
"""

from __future__ import annotations

from collections.abc import Sequence

from alicerce.application.ports.demand_repository import (
    DemandPatchWriterProtocol,
    DemandReaderProtocol,
)
from alicerce.domain.models.demand import Demand
from alicerce.domain.models.transition import DemandPatch, apply_patch


class DemandRepositoryStub(DemandReaderProtocol, DemandPatchWriterProtocol):
    """In-memory demand store.

    Test Control Methods:
        - add_demand: Add or replace a demand snapshot
        - clear: Remove all demands
        - applied_patches: Patches written so far, in order

    Example:
        stub = DemandRepositoryStub()
        stub.add_demand(demand)
        stub.apply(patch)
    """

    def __init__(self, demands: Sequence[Demand] = ()) -> None:
        """Initialize the stub, optionally pre-loaded with demands."""
        self._demands: dict[int, Demand] = {d.id: d for d in demands}
        self._patches: list[DemandPatch] = []

    # =========================================================================
    # Protocol Implementation
    # =========================================================================

    def get_demand(self, demand_id: int) -> Demand | None:
        return self._demands.get(demand_id)

    def list_demands(self) -> Sequence[Demand]:
        """Return all demands in insertion order."""
        return list(self._demands.values())

    def apply(self, patch: DemandPatch) -> Demand:
        """Apply a patch to the stored snapshot (last write wins).

        Raises:
            KeyError: If the demand is unknown.
        """
        current = self._demands[patch.demand_id]
        updated = apply_patch(current, patch)
        self._demands[updated.id] = updated
        self._patches.append(patch)
        return updated

    # =========================================================================
    # Test Control Methods
    # =========================================================================

    def add_demand(self, demand: Demand) -> None:
        self._demands[demand.id] = demand

    def clear(self) -> None:
        self._demands.clear()
        self._patches.clear()

    @property
    def applied_patches(self) -> list[DemandPatch]:
        return list(self._patches)
