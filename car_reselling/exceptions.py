"""Custom exception hierarchy for car-reselling."""


class CarResellingError(Exception):
    """Base exception for all car-reselling errors."""


class ValidationError(CarResellingError):
    """Raised when caller input is malformed or out of range.

    Always tied to the offending field so callers can report it back.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class EntityNotFoundError(CarResellingError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(CarResellingError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(CarResellingError):
    """Raised when configuration is invalid or missing."""


class SinkError(CarResellingError):
    """Raised when a sink operation fails."""
