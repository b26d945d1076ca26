"""Tests for the exception hierarchy."""

import pytest

from car_reselling.exceptions import (
    CarResellingError,
    ConfigurationError,
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
    SinkError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Every error derives from the package base error."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            EntityNotFoundError,
            InvalidEntityStateError,
            ReferentialIntegrityError,
            SinkError,
        ],
    )
    def test_subclass_of_base(self, exc_class: type) -> None:
        """Test that errors can be caught as CarResellingError."""
        with pytest.raises(CarResellingError):
            raise exc_class("boom")

    def test_referential_integrity_is_not_found(self) -> None:
        """A broken reference is a kind of missing entity."""
        assert issubclass(ReferentialIntegrityError, EntityNotFoundError)


class TestValidationError:
    """Tests for ValidationError."""

    def test_field_and_message(self) -> None:
        error = ValidationError("license_plate", "invalid format.")

        assert error.field == "license_plate"
        assert error.message == "invalid format."
        assert str(error) == "license_plate: invalid format."
        assert isinstance(error, CarResellingError)
