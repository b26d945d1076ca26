"""Money field checks shared by the domain models and the services."""

from decimal import Decimal

from car_reselling.exceptions import ValidationError


def validate_required_money(value: Decimal | None, field_name: str) -> None:
    if value is None:
        raise ValidationError(field_name, "required.")
    validate_optional_money(value, field_name)


def validate_optional_money(value: Decimal | None, field_name: str) -> None:
    """Accept ``None`` or a finite, non-negative ``Decimal``.

    Raises
    ------
    ValidationError
        For floats and other non-Decimal types, NaN, infinities and
        negative amounts.
    """
    if value is None:
        return
    if not isinstance(value, Decimal):
        raise ValidationError(field_name, "must be a Decimal.")
    if not value.is_finite():
        raise ValidationError(field_name, "must be a finite amount.")
    if value < 0:
        raise ValidationError(field_name, "cannot be negative.")
