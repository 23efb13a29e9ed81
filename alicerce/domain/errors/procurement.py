"""Procurement engine errors.

Every failure the engine reports is an operator input defect, never a
transient fault, so none of these is retried.

Taxonomy:
- ValidationError: a required field is missing or empty.
- InvalidTransitionError: the action is not legal from the current status.
- IntegrityError: a selection references a declined, missing or unknown
  proposal or item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from alicerce.domain.exceptions import AlicerceError

if TYPE_CHECKING:
    from alicerce.domain.models.demand import DemandStatus
    from alicerce.domain.models.transition import DemandAction


class ProcurementError(AlicerceError):
    """Base class for errors reported across the engine boundary."""

    code: str = "procurement_error"

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "message": self.message}


class ValidationError(ProcurementError):
    """Raised when a required piece of evidence is missing.

    Attributes:
        field: Name of the missing or empty field.
    """

    code = "validation_error"

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required")

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "field": self.field}


class InvalidTransitionError(ProcurementError):
    """Raised when an action is not legal from the demand's current status.

    Attributes:
        current_status: Status the demand is in.
        action: Action that was requested.
        requested_status: Status the action would lead to.
        allowed_actions: Actions legal from the current status.
    """

    code = "invalid_transition"

    def __init__(
        self,
        current_status: DemandStatus,
        action: DemandAction,
        requested_status: DemandStatus,
        allowed_actions: tuple[DemandAction, ...] = (),
    ) -> None:
        self.current_status = current_status
        self.action = action
        self.requested_status = requested_status
        self.allowed_actions = allowed_actions

        allowed_str = (
            f" Allowed actions: {[a.value for a in allowed_actions]}"
            if allowed_actions
            else ""
        )
        super().__init__(
            f"Invalid transition: {current_status.value} -> "
            f"{requested_status.value} via {action.value}.{allowed_str}"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            **super().to_dict(),
            "current_status": self.current_status.value,
            "requested_status": self.requested_status.value,
            "action": self.action.value,
        }


class IntegrityError(ProcurementError):
    """Raised when a selection points at something that cannot win.

    Attributes:
        reference: Human-readable reference to the offending record
            (e.g. "item 3", "proposal 12").
    """

    code = "integrity_error"

    def __init__(self, reference: str, message: str) -> None:
        self.reference = reference
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "reference": self.reference}
