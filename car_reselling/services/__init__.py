"""Orchestration services over the inventory store."""

from car_reselling.services.document import DocumentService
from car_reselling.services.partner import PartnerService
from car_reselling.services.report import ReportService
from car_reselling.services.service_entry import ServiceEntryService
from car_reselling.services.vehicle import VehicleService

__all__ = [
    "DocumentService",
    "PartnerService",
    "ReportService",
    "ServiceEntryService",
    "VehicleService",
]
