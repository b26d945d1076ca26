"""Lot turnover scenario: vehicles bought, serviced, distributed and sold."""

from __future__ import annotations

import logging
import random
from decimal import ROUND_HALF_UP, Decimal

from car_reselling.config import LifecycleConfig, TaxRates
from car_reselling.engine import TaxCalculator
from car_reselling.generators import PartnerGenerator, ServiceEntryGenerator, VehicleGenerator
from car_reselling.models import Partner, Vehicle, VehicleStatus
from car_reselling.services import PartnerService, ServiceEntryService, VehicleService
from car_reselling.store import InventoryStore

logger = logging.getLogger(__name__)

# Lifecycle order used to walk a vehicle up to its final stage
STAGES = [
    VehicleStatus.IN_LOT,
    VehicleStatus.IN_SERVICE,
    VehicleStatus.READY_FOR_DISTRIBUTION,
    VehicleStatus.DISTRIBUTED,
    VehicleStatus.SOLD,
]


class LotTurnoverScenario:
    """Populate an inventory by running generated vehicles through the lifecycle.

    This scenario creates:
    - Resale partners
    - Purchased vehicles spread over every lifecycle stage
    - Service costs for vehicles that went through the workshop
    - Sales at a markup over the vehicle's total cost

    Every step goes through the services, so the resulting store also holds
    the lifecycle events they emitted.
    """

    DEFAULT_STAGE_WEIGHTS = {
        VehicleStatus.IN_LOT: 0.10,
        VehicleStatus.IN_SERVICE: 0.15,
        VehicleStatus.READY_FOR_DISTRIBUTION: 0.15,
        VehicleStatus.DISTRIBUTED: 0.25,
        VehicleStatus.SOLD: 0.35,
    }

    def __init__(
        self,
        num_vehicles: int = 50,
        num_partners: int = 5,
        stage_weights: dict[VehicleStatus, float] | None = None,
        markup_range: tuple[float, float] = (1.05, 1.30),
        max_services: int = 3,
        seed: int | None = None,
        *,
        tax_rates: TaxRates | None = None,
        lifecycle: LifecycleConfig | None = None,
    ) -> None:
        """Initialize lot turnover scenario.

        Parameters
        ----------
        num_vehicles : int
            Number of vehicles to purchase.
        num_partners : int
            Number of resale partners.
        stage_weights : dict[VehicleStatus, float] | None
            Relative weight of each final lifecycle stage.
        markup_range : tuple[float, float]
            Selling price as a multiple of total cost.
        max_services : int
            Maximum service entries per serviced vehicle.
        seed : int | None
            Random seed for reproducibility.
        tax_rates : TaxRates | None
            Rates used by the vehicle service.
        lifecycle : LifecycleConfig | None
            Lifecycle switches used by the vehicle service.
        """
        if num_partners < 1 and num_vehicles > 0:
            raise ValueError("At least one partner is required to distribute vehicles")

        self.num_vehicles = num_vehicles
        self.num_partners = num_partners
        self.stage_weights = stage_weights or self.DEFAULT_STAGE_WEIGHTS
        self.markup_range = markup_range
        self.max_services = max_services
        self.seed = seed
        self.lifecycle = lifecycle or LifecycleConfig()

        if seed is not None:
            random.seed(seed)

        self.store = InventoryStore()
        self.vehicle_service = VehicleService(
            self.store,
            tax_calculator=TaxCalculator(tax_rates),
            lifecycle=self.lifecycle,
        )
        self.service_entry_service = ServiceEntryService(self.store)
        self.partner_service = PartnerService(self.store)

        self._vehicle_gen = VehicleGenerator(seed=seed)
        self._partner_gen = PartnerGenerator(seed=seed)
        self._service_gen = ServiceEntryGenerator(seed=seed)

    def generate(self) -> InventoryStore:
        """Generate all data for the scenario.

        Returns
        -------
        InventoryStore
            Store containing partners, vehicles, services and events.
        """
        logger.info(
            "Starting lot turnover scenario: %d vehicles, %d partners",
            self.num_vehicles,
            self.num_partners,
        )

        partners = [self._create_partner() for _ in range(self.num_partners)]

        stages = list(self.stage_weights)
        weights = list(self.stage_weights.values())
        for _ in range(self.num_vehicles):
            final_stage = random.choices(stages, weights=weights)[0]
            self._run_vehicle(final_stage, partners)

        logger.info("Scenario complete: %s", self.store.summary())
        return self.store

    def _create_partner(self) -> Partner:
        template = self._partner_gen.generate()
        return self.partner_service.create_partner(
            name=template.name,
            city=template.city,
            commission_rate=template.commission_rate,
        )

    def _run_vehicle(self, final_stage: VehicleStatus, partners: list[Partner]) -> Vehicle:
        template = self._vehicle_gen.generate()
        vehicle = self.vehicle_service.create_vehicle(
            license_plate=template.license_plate,
            year=template.year,
            color=template.color,
            brand=template.brand,
            model=template.model,
            supplier_source=template.supplier_source,
            purchase_price=template.purchase_price,
            freight_cost=template.freight_cost,
            purchase_commission=template.purchase_commission,
            renavam=template.renavam,
            vin=template.vin,
            created_at=template.created_at,
        )
        vehicle_id = vehicle.vehicle_id

        for stage in STAGES[1 : STAGES.index(final_stage) + 1]:
            if stage == VehicleStatus.IN_SERVICE:
                self.vehicle_service.transition_status(vehicle_id, stage)
                self._add_services(vehicle_id)
            elif stage == VehicleStatus.READY_FOR_DISTRIBUTION:
                self.vehicle_service.transition_status(vehicle_id, stage)
            elif stage == VehicleStatus.DISTRIBUTED:
                partner = random.choice(partners)
                self.vehicle_service.assign_partner(vehicle_id, partner.partner_id)
            elif stage == VehicleStatus.SOLD:
                self._sell(vehicle)

        return vehicle

    def _add_services(self, vehicle_id: str) -> None:
        for _ in range(random.randint(0, self.max_services)):
            entry = self._service_gen.generate(vehicle_id)
            self.service_entry_service.add_service(
                vehicle_id,
                service_type=entry.service_type,
                service_value=entry.service_value,
                description=entry.description,
                performed_at=entry.performed_at,
            )

    def _sell(self, vehicle: Vehicle) -> None:
        services_total = self.store.services_total(vehicle.vehicle_id)
        markup = Decimal(str(round(random.uniform(*self.markup_range), 3)))
        selling_price = (vehicle.total_cost(services_total) * markup).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )

        self.vehicle_service.update_selling_price(vehicle.vehicle_id, selling_price)
        if not self.lifecycle.selling_price_marks_sold:
            self.vehicle_service.transition_status(vehicle.vehicle_id, VehicleStatus.SOLD)
