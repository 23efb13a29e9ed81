"""Application ports (collaborator interfaces)."""

from alicerce.application.ports.demand_repository import (
    DemandPatchWriterProtocol,
    DemandReaderProtocol,
)
from alicerce.application.ports.time_authority import TimeAuthorityProtocol

__all__ = [
    "DemandPatchWriterProtocol",
    "DemandReaderProtocol",
    "TimeAuthorityProtocol",
]
