"""Unit tests for procurement errors."""

from alicerce.domain.errors.procurement import (
    IntegrityError,
    InvalidTransitionError,
    ProcurementError,
    ValidationError,
)
from alicerce.domain.exceptions import AlicerceError
from alicerce.domain.models.demand import DemandStatus
from alicerce.domain.models.transition import DemandAction


class TestProcurementError:
    """Tests for the error hierarchy."""

    def test_all_errors_share_base(self) -> None:
        for error_class in (ValidationError, InvalidTransitionError, IntegrityError):
            assert issubclass(error_class, ProcurementError)
        assert issubclass(ProcurementError, AlicerceError)

    def test_codes_are_distinct(self) -> None:
        codes = {ValidationError.code, InvalidTransitionError.code, IntegrityError.code}
        assert len(codes) == 3


class TestValidationError:
    """Tests for ValidationError."""

    def test_default_message(self) -> None:
        error = ValidationError("justification")
        assert error.field == "justification"
        assert str(error) == "justification is required"

    def test_to_dict(self) -> None:
        error = ValidationError("reason", "A reason is required")
        assert error.to_dict() == {
            "code": "validation_error",
            "message": "A reason is required",
            "field": "reason",
        }


class TestInvalidTransitionError:
    """Tests for InvalidTransitionError."""

    def test_message_and_attributes(self) -> None:
        error = InvalidTransitionError(
            current_status=DemandStatus.COMPLETED,
            action=DemandAction.CANCEL,
            requested_status=DemandStatus.CANCELLED,
        )

        assert error.current_status is DemandStatus.COMPLETED
        assert error.message == "Invalid transition: Completed -> Cancelled via cancel."
        assert error.to_dict()["action"] == "cancel"


class TestIntegrityError:
    """Tests for IntegrityError."""

    def test_reference_in_dict(self) -> None:
        error = IntegrityError("item 3", "Item 3 was declined")
        assert error.to_dict()["reference"] == "item 3"
        assert error.code == "integrity_error"
