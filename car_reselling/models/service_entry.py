"""Maintenance and repair cost lines attached to a vehicle."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from car_reselling.models.enums import ServiceType


@dataclass
class ServiceEntry:
    """Service performed on a vehicle while it is still in the lot.

    The entry does not guard its own edit-lock; callers check
    ``Vehicle.ensure_services_editable`` first.
    """

    service_id: str
    vehicle_id: str
    service_type: ServiceType
    description: str
    service_value: Decimal
    performed_at: date
    created_at: datetime
    updated_at: datetime | None = None

    def update(
        self,
        service_type: ServiceType,
        description: str,
        service_value: Decimal,
        performed_at: date,
    ) -> None:
        self.service_type = service_type
        self.description = description
        self.service_value = service_value
        self.performed_at = performed_at
