"""Domain models for vehicle resale."""

from car_reselling.models.base import Event
from car_reselling.models.catalog import Brand, VehicleModel
from car_reselling.models.document import Document
from car_reselling.models.enums import (
    DocumentType,
    ServiceType,
    SupplierSource,
    VehicleStatus,
)
from car_reselling.models.partner import Partner
from car_reselling.models.report import (
    DistributedVehicleRow,
    DistributedVehiclesReport,
    ReportFilter,
    ReportPartnerGroup,
    ReportVehicleItem,
    SoldVehicleItem,
    SoldVehicleRow,
    SoldVehiclesReport,
    TaxBreakdown,
    VehicleSummary,
)
from car_reselling.models.service_entry import ServiceEntry
from car_reselling.models.vehicle import Vehicle

__all__ = [
    "Brand",
    "DistributedVehicleRow",
    "DistributedVehiclesReport",
    "Document",
    "DocumentType",
    "Event",
    "Partner",
    "ReportFilter",
    "ReportPartnerGroup",
    "ReportVehicleItem",
    "ServiceEntry",
    "ServiceType",
    "SoldVehicleItem",
    "SoldVehicleRow",
    "SoldVehiclesReport",
    "SupplierSource",
    "TaxBreakdown",
    "Vehicle",
    "VehicleModel",
    "VehicleStatus",
    "VehicleSummary",
]
