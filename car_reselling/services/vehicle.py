"""Vehicle lifecycle orchestration.

Loads vehicles from the store, validates caller input, applies the lifecycle
operations on the ``Vehicle`` aggregate and writes the result back.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from car_reselling.config import LifecycleConfig
from car_reselling.engine.taxes import TaxCalculator, taxable_margin
from car_reselling.exceptions import EntityNotFoundError, ValidationError
from car_reselling.models import (
    Brand,
    Partner,
    SupplierSource,
    TaxBreakdown,
    Vehicle,
    VehicleModel,
    VehicleStatus,
    VehicleSummary,
)
from car_reselling.models.money import validate_optional_money, validate_required_money
from car_reselling.services.base import (
    BaseService,
    normalize_optional_text,
    normalize_plate,
    validate_plate,
    validate_required_text,
)
from car_reselling.store import InventoryStore

logger = logging.getLogger(__name__)

MIN_VEHICLE_YEAR = 1900


class VehicleService(BaseService):
    """Create, edit and move vehicles through their lifecycle."""

    def __init__(
        self,
        store: InventoryStore,
        tax_calculator: TaxCalculator | None = None,
        lifecycle: LifecycleConfig | None = None,
    ) -> None:
        super().__init__(store)
        self.tax_calculator = tax_calculator or TaxCalculator()
        self.lifecycle = lifecycle or LifecycleConfig()

    def create_vehicle(
        self,
        license_plate: str,
        year: int,
        color: str,
        brand: str,
        model: str,
        supplier_source: SupplierSource,
        purchase_price: Decimal,
        freight_cost: Decimal | None = None,
        purchase_commission: Decimal | None = None,
        renavam: str | None = None,
        vin: str | None = None,
        created_at: datetime | None = None,
    ) -> Vehicle:
        """Register a purchased vehicle in the lot.

        Raises
        ------
        ValidationError
            On a malformed plate, missing brand/model, bad year, or money
            that is negative or not finite.
        """
        plate = normalize_plate(license_plate)
        validate_plate(plate)
        self._validate_year(year)
        validate_required_money(purchase_price, "purchase_price")
        freight = Decimal("0") if freight_cost is None else freight_cost
        validate_optional_money(freight, "freight_cost")
        commission = Decimal("0") if purchase_commission is None else purchase_commission
        validate_optional_money(commission, "purchase_commission")

        now = created_at or datetime.now()
        brand_entity = self._resolve_brand(brand, now)
        model_entity = self._resolve_model(brand_entity.brand_id, model, now)

        vehicle = Vehicle(
            vehicle_id=str(uuid.uuid4()),
            license_plate=plate,
            renavam=normalize_optional_text(renavam) or None,
            vin=normalize_optional_text(vin) or None,
            year=year,
            color=color,
            brand=brand_entity.name,
            model=model_entity.name,
            brand_id=brand_entity.brand_id,
            model_id=model_entity.model_id,
            supplier_source=supplier_source,
            purchase_price=purchase_price,
            freight_cost=freight,
            purchase_commission=commission,
            created_at=now,
            updated_at=now,
        )
        vehicle.ensure_distribution_invariant()
        self.store.add_vehicle(vehicle)

        self._record_event(
            "vehicle.created",
            vehicle.vehicle_id,
            {"license_plate": plate, "purchase_price": purchase_price, "status": vehicle.status},
        )
        logger.info(
            "Vehicle %s created with plate %s",
            vehicle.vehicle_id,
            plate,
            extra={"extra": {"vehicle_id": vehicle.vehicle_id, "status": vehicle.status.value}},
        )
        return vehicle

    def get_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = self.store.get_vehicle(vehicle_id)
        if vehicle is None:
            raise EntityNotFoundError(f"Vehicle {vehicle_id} not found")
        return vehicle

    def update_vehicle(
        self,
        vehicle_id: str,
        year: int,
        color: str,
        brand: str,
        model: str,
        supplier_source: SupplierSource,
        purchase_price: Decimal,
        freight_cost: Decimal,
        purchase_commission: Decimal | None = None,
        invoice_document_id: str | None = None,
        payment_receipt_document_id: str | None = None,
    ) -> Vehicle:
        """Edit descriptive/purchase fields and the linked documents."""
        self._validate_year(year)
        validate_required_money(purchase_price, "purchase_price")
        validate_required_money(freight_cost, "freight_cost")
        validate_optional_money(purchase_commission, "purchase_commission")

        vehicle = self.get_vehicle(vehicle_id)
        self._validate_document_link(vehicle_id, invoice_document_id)
        self._validate_document_link(vehicle_id, payment_receipt_document_id)

        now = datetime.now()
        brand_entity = self._resolve_brand(brand, now)
        model_entity = self._resolve_model(brand_entity.brand_id, model, now)

        vehicle.update_details(
            year=year,
            color=color,
            brand=brand_entity.name,
            model=model_entity.name,
            supplier_source=supplier_source,
            purchase_price=purchase_price,
            freight_cost=freight_cost,
            purchase_commission=(
                vehicle.purchase_commission if purchase_commission is None else purchase_commission
            ),
            brand_id=brand_entity.brand_id,
            model_id=model_entity.model_id,
            now=now,
        )
        vehicle.update_linked_documents(invoice_document_id, payment_receipt_document_id)
        vehicle.ensure_distribution_invariant()
        self.store.update_vehicle(vehicle)

        self._record_event("vehicle.updated", vehicle_id, {"purchase_price": purchase_price})
        return vehicle

    def transition_status(
        self,
        vehicle_id: str,
        target: VehicleStatus,
        partner_id: str | None = None,
    ) -> Vehicle:
        """Move a vehicle to ``target``, checking the partner exists.

        Moving to the current status changes nothing, so a ``partner_id``
        passed with it is neither looked up nor applied.

        Raises
        ------
        EntityNotFoundError
            If the vehicle or the given partner does not exist.
        InvalidEntityStateError
            If the lifecycle rules reject the transition.
        """
        vehicle = self.get_vehicle(vehicle_id)
        previous = vehicle.status

        if (
            target == VehicleStatus.DISTRIBUTED
            and target != previous
            and partner_id is not None
            and vehicle.is_status_transition_allowed(target)
        ):
            self._require_partner(partner_id)

        vehicle.transition_status(target, partner_id)
        self.store.update_vehicle(vehicle)

        if previous != vehicle.status:
            self._record_event(
                "vehicle.status_changed",
                vehicle_id,
                {
                    "from_status": previous,
                    "to_status": vehicle.status,
                    "assigned_partner_id": vehicle.assigned_partner_id,
                },
            )
        return vehicle

    def assign_partner(self, vehicle_id: str, partner_id: str) -> Vehicle:
        """Distribute a ready vehicle to an existing partner."""
        vehicle = self.get_vehicle(vehicle_id)
        partner = self._require_partner(partner_id)

        vehicle.assign_partner(partner.partner_id)
        self.store.update_vehicle(vehicle)

        self._record_event(
            "vehicle.partner_assigned",
            vehicle_id,
            {"assigned_partner_id": partner.partner_id, "distributed_at": vehicle.distributed_at},
        )
        return vehicle

    def update_selling_price(self, vehicle_id: str, selling_price: Decimal) -> Vehicle:
        """Record the sale price; marks the vehicle SOLD when so configured."""
        validate_required_money(selling_price, "selling_price")
        vehicle = self.get_vehicle(vehicle_id)
        previous = vehicle.status

        vehicle.update_selling_price(
            selling_price,
            mark_sold=self.lifecycle.selling_price_marks_sold,
        )
        self.store.update_vehicle(vehicle)

        event_type = "vehicle.sold" if previous != vehicle.status else "vehicle.updated"
        self._record_event(event_type, vehicle_id, {"selling_price": selling_price, "status": vehicle.status})
        return vehicle

    def get_vehicle_taxes(self, vehicle_id: str) -> TaxBreakdown:
        """Taxes due on the vehicle's selling price (all zero before a sale)."""
        vehicle = self.get_vehicle(vehicle_id)
        if vehicle.selling_price is None:
            return TaxBreakdown()
        return self.tax_calculator.calculate_taxes(
            vehicle.selling_price,
            taxable_margin(vehicle.selling_price, vehicle.purchase_price),
        )

    def summarize_vehicle(self, vehicle: Vehicle, now: datetime | None = None) -> VehicleSummary:
        services_total = self.store.services_total(vehicle.vehicle_id)
        partner = (
            self.store.get_partner(vehicle.assigned_partner_id)
            if vehicle.assigned_partner_id
            else None
        )
        return VehicleSummary(
            vehicle_id=vehicle.vehicle_id,
            license_plate=vehicle.license_plate,
            brand=vehicle.brand,
            model=vehicle.model,
            year=vehicle.year,
            status=vehicle.status,
            purchase_price=vehicle.purchase_price,
            purchase_commission=vehicle.purchase_commission or Decimal("0"),
            services_total=services_total,
            total_cost=vehicle.total_cost(services_total),
            assigned_partner_name=partner.name if partner else None,
            yard_days=vehicle.calculate_total_yard_days(now),
        )

    def list_vehicles(
        self,
        status: VehicleStatus | None = None,
        query: str | None = None,
        page: int = 0,
        size: int | None = None,
    ) -> list[VehicleSummary]:
        """Summaries of matching vehicles, newest first.

        Parameters
        ----------
        status : VehicleStatus | None
            Only vehicles in this status.
        query : str | None
            Case-insensitive text matched against plate, brand and model.
        page : int
            Zero-based page number; negative pages read as page 0.
        size : int | None
            Page size. ``None`` returns every match; sizes below 1 are
            treated as 1 when computing the offset.
        """
        vehicles = self.store.find_vehicles(status, query)
        if size is not None:
            offset = max(page, 0) * max(size, 1)
            vehicles = vehicles[offset : offset + max(size, 0)]
        return [self.summarize_vehicle(v) for v in vehicles]

    def count_vehicles(self, status: VehicleStatus | None = None, query: str | None = None) -> int:
        """Number of vehicles ``list_vehicles`` would return without paging."""
        return len(self.store.find_vehicles(status, query))

    def _require_partner(self, partner_id: str) -> Partner:
        partner = self.store.get_partner(partner_id)
        if partner is None:
            raise EntityNotFoundError(f"Partner {partner_id} not found")
        return partner

    def _validate_document_link(self, vehicle_id: str, document_id: str | None) -> None:
        if document_id is None:
            return
        document = self.store.get_document(document_id)
        if document is None or document.vehicle_id != vehicle_id:
            raise EntityNotFoundError(f"Document {document_id} not found for vehicle {vehicle_id}")

    @staticmethod
    def _validate_year(year: int) -> None:
        if not isinstance(year, int) or year < MIN_VEHICLE_YEAR or year > datetime.now().year + 1:
            raise ValidationError("year", "out of range.")

    def _resolve_brand(self, brand: str, now: datetime) -> Brand:
        name = validate_required_text(brand, "brand")
        existing = self.store.find_brand_by_name(name)
        if existing is not None:
            return existing
        created = Brand(brand_id=str(uuid.uuid4()), name=name, created_at=now, updated_at=now)
        self.store.add_brand(created)
        logger.debug("Brand %s added to catalog", name)
        return created

    def _resolve_model(self, brand_id: str, model: str, now: datetime) -> VehicleModel:
        name = validate_required_text(model, "model")
        existing = self.store.find_model(brand_id, name)
        if existing is not None:
            return existing
        created = VehicleModel(
            model_id=str(uuid.uuid4()),
            brand_id=brand_id,
            name=name,
            created_at=now,
            updated_at=now,
        )
        self.store.add_model(created)
        logger.debug("Model %s added to catalog", name)
        return created
