"""Demand store collaborator ports.

The engine never reads or writes storage itself. These protocols describe
what the calling layer provides: a read accessor for all demands (used for
price history mining) and a write accessor that durably persists a patch.
Atomicity of the write is the implementation's responsibility.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from alicerce.domain.models.demand import Demand
    from alicerce.domain.models.transition import DemandPatch


@runtime_checkable
class DemandReaderProtocol(Protocol):
    """Read access to demand snapshots."""

    def get_demand(self, demand_id: int) -> Demand | None:
        """Return the current snapshot of a demand, or None if unknown."""
        ...

    def list_demands(self) -> Sequence[Demand]:
        """Return snapshots of all known demands."""
        ...


@runtime_checkable
class DemandPatchWriterProtocol(Protocol):
    """Durable persistence of engine decisions."""

    def apply(self, patch: DemandPatch) -> Demand:
        """Persist a patch and return the updated snapshot.

        Raises:
            KeyError: If the patched demand does not exist.
        """
        ...
