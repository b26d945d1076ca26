"""Service entry (maintenance cost) orchestration."""

import logging
import uuid
from datetime import date, datetime
from decimal import Decimal

from car_reselling.exceptions import EntityNotFoundError
from car_reselling.models import ServiceEntry, ServiceType, Vehicle
from car_reselling.models.money import validate_required_money
from car_reselling.services.base import BaseService

logger = logging.getLogger(__name__)


class ServiceEntryService(BaseService):
    """Add, edit and remove service costs while a vehicle is still in the lot."""

    def add_service(
        self,
        vehicle_id: str,
        service_type: ServiceType,
        service_value: Decimal,
        description: str = "",
        performed_at: date | None = None,
    ) -> ServiceEntry:
        """Attach a service cost to a vehicle.

        Raises
        ------
        EntityNotFoundError
            If the vehicle does not exist.
        InvalidEntityStateError
            If the vehicle was already distributed or sold.
        ValidationError
            If the value is missing or negative.
        """
        vehicle = self._get_vehicle(vehicle_id)
        vehicle.ensure_services_editable()
        validate_required_money(service_value, "service_value")

        now = datetime.now()
        entry = ServiceEntry(
            service_id=str(uuid.uuid4()),
            vehicle_id=vehicle_id,
            service_type=service_type,
            description=description,
            service_value=service_value,
            performed_at=performed_at or now.date(),
            created_at=now,
            updated_at=now,
        )
        self.store.add_service(entry)

        self._record_event(
            "service.added",
            vehicle_id,
            {"service_id": entry.service_id, "service_type": service_type, "service_value": service_value},
        )
        logger.debug("Service %s added to vehicle %s", entry.service_id, vehicle_id)
        return entry

    def list_services(self, vehicle_id: str) -> list[ServiceEntry]:
        self._get_vehicle(vehicle_id)
        return self.store.get_vehicle_services(vehicle_id)

    def total_services(self, vehicle_id: str) -> Decimal:
        return self.store.services_total(vehicle_id)

    def update_service(
        self,
        vehicle_id: str,
        service_id: str,
        service_type: ServiceType,
        service_value: Decimal,
        description: str,
        performed_at: date,
    ) -> ServiceEntry:
        vehicle = self._get_vehicle(vehicle_id)
        vehicle.ensure_services_editable()
        validate_required_money(service_value, "service_value")
        entry = self._get_vehicle_service(vehicle_id, service_id)

        entry.update(service_type, description, service_value, performed_at)
        entry.updated_at = datetime.now()
        self.store.update_service(entry)

        self._record_event(
            "service.updated",
            vehicle_id,
            {"service_id": service_id, "service_value": service_value},
        )
        return entry

    def delete_service(self, vehicle_id: str, service_id: str) -> None:
        vehicle = self._get_vehicle(vehicle_id)
        vehicle.ensure_services_editable()
        self._get_vehicle_service(vehicle_id, service_id)

        self.store.delete_service(service_id)
        self._record_event("service.deleted", vehicle_id, {"service_id": service_id})

    def _get_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = self.store.get_vehicle(vehicle_id)
        if vehicle is None:
            raise EntityNotFoundError(f"Vehicle {vehicle_id} not found")
        return vehicle

    def _get_vehicle_service(self, vehicle_id: str, service_id: str) -> ServiceEntry:
        entry = self.store.get_service(service_id)
        if entry is None:
            raise EntityNotFoundError(f"Service {service_id} not found")
        if entry.vehicle_id != vehicle_id:
            raise EntityNotFoundError(f"Service {service_id} not found for vehicle {vehicle_id}")
        return entry
