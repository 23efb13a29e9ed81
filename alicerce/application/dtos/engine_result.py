"""Engine boundary result DTO.

Errors never cross the engine boundary as exceptions. Every facade
operation returns an EngineResult holding either a value or the
procurement error describing why the operation was rejected, so callers
can render the failure inline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

from alicerce.domain.errors.procurement import ProcurementError

T = TypeVar("T")


@dataclass(frozen=True)
class EngineResult(Generic[T]):
    """Outcome of an engine operation.

    Attributes:
        value: The decision, when the operation succeeded.
        error: The rejection reason, when it did not.
    """

    value: T | None = None
    error: ProcurementError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("EngineResult holds exactly one of value or error")

    @classmethod
    def success(cls, value: T) -> EngineResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ProcurementError) -> EngineResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, re-raising the error if there is none."""
        if self.error is not None:
            raise self.error
        return cast(T, self.value)
