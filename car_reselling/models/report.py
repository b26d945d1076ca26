"""Report inputs and outputs: raw rows, settlement items and totals."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from car_reselling.models.enums import VehicleStatus

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class TaxBreakdown:
    """Taxes due on one sale, each component rounded to cents.

    ``icms`` is the consumption tax on revenue; ``pis`` and ``cofins`` are the
    federal social contributions; ``csll`` and ``irpj`` the income-based
    contributions.
    """

    icms: Decimal = ZERO
    pis: Decimal = ZERO
    cofins: Decimal = ZERO
    csll: Decimal = ZERO
    irpj: Decimal = ZERO
    total_taxes: Decimal = ZERO


@dataclass(frozen=True)
class ReportFilter:
    """Optional filters applied by the row source before building a report."""

    start_date: date | None = None
    end_date: date | None = None
    brand: str | None = None  # case-insensitive substring
    model: str | None = None  # case-insensitive substring
    partner_id: str | None = None


@dataclass(frozen=True)
class SoldVehicleRow:
    """Raw figures for a sold vehicle, as supplied by the data source."""

    vehicle_id: str
    license_plate: str
    brand: str
    model: str
    year: int
    sold_at: date | None
    purchase_price: Decimal
    purchase_commission: Decimal
    freight_cost: Decimal
    selling_price: Decimal
    services_total: Decimal


@dataclass
class SoldVehicleItem:
    """Settlement of one sold vehicle."""

    vehicle_id: str
    license_plate: str
    brand: str
    model: str
    year: int
    sold_at: date | None
    selling_price: Decimal
    total_taxes: Decimal
    services_total: Decimal
    purchase_commission: Decimal
    commission_income_tax: Decimal
    vehicle_profit: Decimal


@dataclass
class SoldVehiclesReport:
    """Settlements of a batch of sold vehicles plus running totals."""

    vehicles: list[SoldVehicleItem] = field(default_factory=list)
    total_vehicles_sold: int = 0
    total_sold_value: Decimal = ZERO
    total_taxes_value: Decimal = ZERO
    total_service_value: Decimal = ZERO
    total_commission_value: Decimal = ZERO
    profit: Decimal = ZERO


@dataclass(frozen=True)
class DistributedVehicleRow:
    """Raw figures for a vehicle currently with a partner."""

    partner_id: str
    partner_name: str
    vehicle_id: str
    license_plate: str
    brand: str
    model: str
    year: int
    distributed_at: date | None
    purchase_price: Decimal
    freight_cost: Decimal
    services_total: Decimal


@dataclass
class ReportVehicleItem:
    """Distributed vehicle with its accumulated cost."""

    vehicle_id: str
    license_plate: str
    brand: str
    model: str
    year: int
    distributed_at: date | None
    purchase_price: Decimal
    total_cost: Decimal


@dataclass
class ReportPartnerGroup:
    """Vehicles held by one partner."""

    partner_id: str
    partner_name: str
    vehicles: list[ReportVehicleItem] = field(default_factory=list)
    partner_vehicles_total_value: Decimal = ZERO  # sum of purchase prices
    partner_vehicles_count: int = 0


@dataclass
class DistributedVehiclesReport:
    partners: list[ReportPartnerGroup] = field(default_factory=list)
    overall_vehicles_count: int = 0
    overall_vehicles_total_value: Decimal = ZERO


@dataclass
class VehicleSummary:
    """Listing view of a vehicle with its cost roll-up."""

    vehicle_id: str
    license_plate: str
    brand: str
    model: str
    year: int
    status: VehicleStatus
    purchase_price: Decimal
    purchase_commission: Decimal
    services_total: Decimal
    total_cost: Decimal
    assigned_partner_name: str | None
    yard_days: int
