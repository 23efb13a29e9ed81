"""
Domain layer - Pure business logic of the bidding engine.

This layer contains:
- Domain models (demand, proposals, awards, analysis views)
- Domain services (deadline rules, ranking, award resolution,
  price history, lifecycle)
- Domain exceptions

CRITICAL: This layer must NOT import from application or infrastructure.
"""

from alicerce.domain.errors import (
    IntegrityError,
    InvalidTransitionError,
    ProcurementError,
    ValidationError,
)
from alicerce.domain.exceptions import AlicerceError

__all__: list[str] = [
    "AlicerceError",
    "IntegrityError",
    "InvalidTransitionError",
    "ProcurementError",
    "ValidationError",
]
