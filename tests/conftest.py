"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest

from car_reselling.models import Partner, SupplierSource, Vehicle, VehicleStatus
from car_reselling.services import PartnerService, ServiceEntryService, VehicleService
from car_reselling.store import InventoryStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def store() -> InventoryStore:
    """Create a fresh store for each test."""
    return InventoryStore()


@pytest.fixture
def partner() -> Partner:
    """Sample resale partner."""
    return Partner(
        partner_id="partner-001",
        name="Auto Center Campinas",
        city="Campinas",
        created_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def make_vehicle():
    """Factory for vehicles in any status, consistent with the partner rules."""

    def _make(
        status: VehicleStatus = VehicleStatus.IN_LOT,
        vehicle_id: str = "veh-001",
        license_plate: str = "ABC1D23",
        partner_id: str | None = None,
        selling_price: Decimal | None = None,
    ) -> Vehicle:
        distributed = status in (VehicleStatus.DISTRIBUTED, VehicleStatus.SOLD)
        return Vehicle(
            vehicle_id=vehicle_id,
            license_plate=license_plate,
            year=2020,
            color="Prata",
            brand="Toyota",
            model="Corolla",
            supplier_source=SupplierSource.AUCTION,
            purchase_price=Decimal("10000.00"),
            freight_cost=Decimal("500.00"),
            purchase_commission=Decimal("1000.00"),
            created_at=datetime(2024, 3, 1, 9, 0),
            status=status,
            assigned_partner_id=(partner_id or "partner-001") if distributed else None,
            distributed_at=datetime(2024, 3, 20, 10, 0) if distributed else None,
            selling_price=selling_price,
        )

    return _make


@pytest.fixture
def vehicle_service(store: InventoryStore) -> VehicleService:
    return VehicleService(store)


@pytest.fixture
def service_entry_service(store: InventoryStore) -> ServiceEntryService:
    return ServiceEntryService(store)


@pytest.fixture
def partner_service(store: InventoryStore) -> PartnerService:
    return PartnerService(store)


@pytest.fixture
def registered_partner(partner_service: PartnerService) -> Partner:
    """Partner registered through the service."""
    return partner_service.create_partner("Auto Center Campinas", "Campinas")


@pytest.fixture
def lot_vehicle(vehicle_service: VehicleService) -> Vehicle:
    """Vehicle created through the service, still in the lot."""
    return vehicle_service.create_vehicle(
        license_plate="abc1d23",
        year=2020,
        color="Prata",
        brand="Toyota",
        model="Corolla",
        supplier_source=SupplierSource.AUCTION,
        purchase_price=Decimal("10000.00"),
        freight_cost=Decimal("500.00"),
        purchase_commission=Decimal("1000.00"),
    )
