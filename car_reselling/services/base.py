"""Shared plumbing for the orchestration services."""

import re
import uuid
from datetime import datetime
from typing import Any

from car_reselling.exceptions import ValidationError
from car_reselling.models import Event
from car_reselling.sinks.serialization import serialize_value
from car_reselling.store import InventoryStore

# Old format (ABC1234) or Mercosur (ABC1D23)
PLATE_PATTERN = re.compile(r"^[A-Z]{3}[0-9]{4}$|^[A-Z]{3}[0-9][A-Z][0-9]{2}$")

EVENT_SOURCE = "car-reselling"


class BaseService:
    """Base class for services working on an ``InventoryStore``.

    Parameters
    ----------
    store : InventoryStore
        Backing store; every mutation is written back and recorded as an
        ``Event`` in ``store.events``.
    """

    def __init__(self, store: InventoryStore) -> None:
        self.store = store

    def _record_event(self, event_type: str, subject: str, data: dict[str, Any]) -> Event:
        event = Event(
            event_id=str(uuid.uuid4()),
            event_type=event_type,
            event_time=datetime.now(),
            source=EVENT_SOURCE,
            subject=subject,
            data={key: serialize_value(value) for key, value in data.items()},
        )
        self.store.add_event(event)
        return event


def normalize_plate(plate: str | None) -> str | None:
    return plate.strip().upper() if plate is not None else None


def normalize_optional_text(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def validate_plate(plate: str | None) -> None:
    if plate is None or not PLATE_PATTERN.match(plate):
        raise ValidationError("license_plate", "invalid format.")


def validate_required_text(value: str | None, field_name: str) -> str:
    normalized = normalize_optional_text(value)
    if not normalized:
        raise ValidationError(field_name, "required.")
    return normalized
