"""Domain errors for the Alicerce engine.

All exceptions inherit from AlicerceError.
"""

from alicerce.domain.errors.procurement import (
    IntegrityError,
    InvalidTransitionError,
    ProcurementError,
    ValidationError,
)

__all__: list[str] = [
    "IntegrityError",
    "InvalidTransitionError",
    "ProcurementError",
    "ValidationError",
]
