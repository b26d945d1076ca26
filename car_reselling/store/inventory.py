"""In-memory inventory store with referential integrity."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from car_reselling.exceptions import EntityNotFoundError, ReferentialIntegrityError
from car_reselling.models import (
    Brand,
    DistributedVehicleRow,
    Document,
    Event,
    Partner,
    ReportFilter,
    ServiceEntry,
    SoldVehicleRow,
    Vehicle,
    VehicleModel,
    VehicleStatus,
)


@dataclass
class InventoryStore:
    """In-memory store for vehicles and their related records.

    Also acts as the partner/document lookup and as the row source for the
    distributed and sold vehicle reports.
    """

    # Primary entities
    vehicles: dict[str, Vehicle] = field(default_factory=dict)
    partners: dict[str, Partner] = field(default_factory=dict)
    brands: dict[str, Brand] = field(default_factory=dict)
    models: dict[str, VehicleModel] = field(default_factory=dict)
    services: dict[str, ServiceEntry] = field(default_factory=dict)
    documents: dict[str, Document] = field(default_factory=dict)

    # Lifecycle events, in emission order
    events: list[Event] = field(default_factory=list)

    # Relationship indexes
    _vehicle_services: dict[str, list[str]] = field(default_factory=dict)
    _vehicle_documents: dict[str, list[str]] = field(default_factory=dict)

    def add_partner(self, partner: Partner) -> None:
        """Add a partner to the store."""
        self.partners[partner.partner_id] = partner

    def add_brand(self, brand: Brand) -> None:
        """Add a brand to the store."""
        self.brands[brand.brand_id] = brand

    def add_model(self, model: VehicleModel) -> None:
        """Add a vehicle model to the store."""
        if model.brand_id not in self.brands:
            raise ReferentialIntegrityError(f"Brand {model.brand_id} not found")
        self.models[model.model_id] = model

    def add_vehicle(self, vehicle: Vehicle) -> None:
        """Add a vehicle to the store."""
        if vehicle.brand_id and vehicle.brand_id not in self.brands:
            raise ReferentialIntegrityError(f"Brand {vehicle.brand_id} not found")
        if vehicle.model_id and vehicle.model_id not in self.models:
            raise ReferentialIntegrityError(f"Model {vehicle.model_id} not found")
        if vehicle.assigned_partner_id and vehicle.assigned_partner_id not in self.partners:
            raise ReferentialIntegrityError(f"Partner {vehicle.assigned_partner_id} not found")

        self.vehicles[vehicle.vehicle_id] = vehicle
        self._vehicle_services.setdefault(vehicle.vehicle_id, [])
        self._vehicle_documents.setdefault(vehicle.vehicle_id, [])

    def update_vehicle(self, vehicle: Vehicle) -> None:
        """Replace a stored vehicle."""
        if vehicle.vehicle_id not in self.vehicles:
            raise EntityNotFoundError(f"Vehicle {vehicle.vehicle_id} not found")
        if vehicle.assigned_partner_id and vehicle.assigned_partner_id not in self.partners:
            raise ReferentialIntegrityError(f"Partner {vehicle.assigned_partner_id} not found")
        self.vehicles[vehicle.vehicle_id] = vehicle

    def add_service(self, service: ServiceEntry) -> None:
        """Add a service entry to the store."""
        if service.vehicle_id not in self.vehicles:
            raise ReferentialIntegrityError(f"Vehicle {service.vehicle_id} not found")

        self.services[service.service_id] = service
        self._vehicle_services[service.vehicle_id].append(service.service_id)

    def update_service(self, service: ServiceEntry) -> None:
        """Replace a stored service entry."""
        if service.service_id not in self.services:
            raise EntityNotFoundError(f"Service {service.service_id} not found")
        self.services[service.service_id] = service

    def delete_service(self, service_id: str) -> None:
        """Remove a service entry."""
        service = self.services.pop(service_id, None)
        if service is None:
            raise EntityNotFoundError(f"Service {service_id} not found")
        self._vehicle_services[service.vehicle_id].remove(service_id)

    def add_document(self, document: Document) -> None:
        """Add document metadata to the store."""
        if document.vehicle_id not in self.vehicles:
            raise ReferentialIntegrityError(f"Vehicle {document.vehicle_id} not found")

        self.documents[document.document_id] = document
        self._vehicle_documents[document.vehicle_id].append(document.document_id)

    def delete_document(self, document_id: str) -> None:
        """Remove document metadata."""
        document = self.documents.pop(document_id, None)
        if document is None:
            raise EntityNotFoundError(f"Document {document_id} not found")
        self._vehicle_documents[document.vehicle_id].remove(document_id)

    def add_event(self, event: Event) -> None:
        """Record a lifecycle event."""
        self.events.append(event)

    # Lookup methods
    def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        return self.vehicles.get(vehicle_id)

    def get_partner(self, partner_id: str) -> Partner | None:
        return self.partners.get(partner_id)

    def get_service(self, service_id: str) -> ServiceEntry | None:
        return self.services.get(service_id)

    def get_document(self, document_id: str) -> Document | None:
        return self.documents.get(document_id)

    def find_brand_by_name(self, name: str) -> Brand | None:
        """Get a brand by name, ignoring case."""
        wanted = name.casefold()
        for brand in self.brands.values():
            if brand.name.casefold() == wanted:
                return brand
        return None

    def find_model(self, brand_id: str, name: str) -> VehicleModel | None:
        """Get a model of a brand by name, ignoring case."""
        wanted = name.casefold()
        for model in self.models.values():
            if model.brand_id == brand_id and model.name.casefold() == wanted:
                return model
        return None

    def find_vehicles(
        self,
        status: VehicleStatus | None = None,
        query: str | None = None,
    ) -> list[Vehicle]:
        """Vehicles by status and plate/brand/model text, newest first."""
        needle = query.strip().casefold() if query else None
        result = []
        for vehicle in self.vehicles.values():
            if status is not None and vehicle.status != status:
                continue
            if needle and not any(
                needle in (text or "").casefold()
                for text in (vehicle.license_plate, vehicle.brand, vehicle.model)
            ):
                continue
            result.append(vehicle)
        return sorted(result, key=lambda v: v.created_at, reverse=True)

    def get_vehicle_services(self, vehicle_id: str) -> list[ServiceEntry]:
        """Get all service entries for a vehicle."""
        service_ids = self._vehicle_services.get(vehicle_id, [])
        return [self.services[sid] for sid in service_ids]

    def get_vehicle_documents(self, vehicle_id: str) -> list[Document]:
        """Get all documents for a vehicle."""
        document_ids = self._vehicle_documents.get(vehicle_id, [])
        return [self.documents[did] for did in document_ids]

    def services_total(self, vehicle_id: str) -> Decimal:
        """Sum of service values for a vehicle (0 when none)."""
        return sum(
            (service.service_value for service in self.get_vehicle_services(vehicle_id)),
            Decimal("0"),
        )

    # Report row sources
    def sold_vehicle_rows(self, report_filter: ReportFilter | None = None) -> list[SoldVehicleRow]:
        """Rows for SOLD vehicles with a selling price, latest update first."""
        report_filter = report_filter or ReportFilter()
        sold = [
            vehicle
            for vehicle in self.vehicles.values()
            if vehicle.status == VehicleStatus.SOLD and vehicle.selling_price is not None
        ]
        sold.sort(key=lambda v: v.updated_at or v.created_at, reverse=True)

        rows = []
        for vehicle in sold:
            sold_at = (vehicle.updated_at or vehicle.created_at).date()
            if not self._matches(vehicle, report_filter, sold_at):
                continue
            rows.append(
                SoldVehicleRow(
                    vehicle_id=vehicle.vehicle_id,
                    license_plate=vehicle.license_plate,
                    brand=vehicle.brand,
                    model=vehicle.model,
                    year=vehicle.year,
                    sold_at=sold_at,
                    purchase_price=vehicle.purchase_price,
                    purchase_commission=vehicle.purchase_commission,
                    freight_cost=vehicle.freight_cost,
                    selling_price=vehicle.selling_price,
                    services_total=self.services_total(vehicle.vehicle_id),
                )
            )
        return rows

    def distributed_vehicle_rows(
        self, report_filter: ReportFilter | None = None
    ) -> list[DistributedVehicleRow]:
        """Rows for DISTRIBUTED vehicles, ordered by partner name then plate."""
        report_filter = report_filter or ReportFilter()
        rows = []
        for vehicle in self.vehicles.values():
            if vehicle.status != VehicleStatus.DISTRIBUTED:
                continue
            partner = self.partners.get(vehicle.assigned_partner_id)
            if partner is None:
                raise ReferentialIntegrityError(f"Partner {vehicle.assigned_partner_id} not found")
            distributed_at = vehicle.distributed_at.date() if vehicle.distributed_at else None
            if not self._matches(vehicle, report_filter, distributed_at):
                continue
            rows.append(
                DistributedVehicleRow(
                    partner_id=partner.partner_id,
                    partner_name=partner.name,
                    vehicle_id=vehicle.vehicle_id,
                    license_plate=vehicle.license_plate,
                    brand=vehicle.brand,
                    model=vehicle.model,
                    year=vehicle.year,
                    distributed_at=distributed_at,
                    purchase_price=vehicle.purchase_price,
                    freight_cost=vehicle.freight_cost,
                    services_total=self.services_total(vehicle.vehicle_id),
                )
            )
        return sorted(rows, key=lambda r: (r.partner_name, r.license_plate))

    @staticmethod
    def _matches(vehicle: Vehicle, report_filter: ReportFilter, on_date: date | None) -> bool:
        if report_filter.start_date and (on_date is None or on_date < report_filter.start_date):
            return False
        if report_filter.end_date and (on_date is None or on_date > report_filter.end_date):
            return False
        if report_filter.brand and report_filter.brand.strip().upper() not in (vehicle.brand or "").upper():
            return False
        if report_filter.model and report_filter.model.strip().upper() not in (vehicle.model or "").upper():
            return False
        if report_filter.partner_id and vehicle.assigned_partner_id != report_filter.partner_id:
            return False
        return True

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "vehicles": len(self.vehicles),
            "partners": len(self.partners),
            "brands": len(self.brands),
            "models": len(self.models),
            "services": len(self.services),
            "documents": len(self.documents),
            "events": len(self.events),
        }
