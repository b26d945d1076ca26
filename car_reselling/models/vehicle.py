"""Vehicle aggregate and its lifecycle rules."""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from car_reselling.exceptions import InvalidEntityStateError, ValidationError
from car_reselling.models.enums import SupplierSource, VehicleStatus
from car_reselling.models.money import validate_required_money

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = frozenset({"vehicle_id", "license_plate"})


@dataclass
class Vehicle:
    """Purchased vehicle moving from the lot to a resale partner and a sale.

    Status and partner assignment are coupled: a partner is assigned exactly
    while the vehicle is DISTRIBUTED or SOLD. Every mutating method re-checks
    this with ``ensure_distribution_invariant``.
    """

    vehicle_id: str
    license_plate: str
    year: int
    color: str
    brand: str
    model: str
    supplier_source: SupplierSource
    purchase_price: Decimal
    created_at: datetime
    renavam: str | None = None
    vin: str | None = None
    brand_id: str | None = None
    model_id: str | None = None
    freight_cost: Decimal = Decimal("0")
    purchase_commission: Decimal = Decimal("0")
    selling_price: Decimal | None = None
    purchase_invoice_document_id: str | None = None
    purchase_payment_receipt_document_id: str | None = None
    status: VehicleStatus = VehicleStatus.IN_LOT
    assigned_partner_id: str | None = None
    distributed_at: datetime | None = None
    updated_at: datetime | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise InvalidEntityStateError(f"Vehicle {name} cannot be changed")
        super().__setattr__(name, value)

    def is_status_transition_allowed(self, target: VehicleStatus) -> bool:
        """Check the transition table without mutating anything."""
        return self.status.can_transition_to(target)

    def transition_status(
        self,
        target: VehicleStatus,
        partner_id: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Move the vehicle to ``target``.

        Parameters
        ----------
        target : VehicleStatus
            Desired status; must be the current status or its successor.
        partner_id : str | None
            Partner receiving the vehicle when distributing. Falls back to
            the partner already assigned.
        now : datetime | None
            Timestamp for ``updated_at``/``distributed_at`` (default: now).

        Raises
        ------
        InvalidEntityStateError
            If the transition is not allowed, no partner can be resolved for
            DISTRIBUTED, or no selling price is set for SOLD.
        """
        if not self.is_status_transition_allowed(target):
            raise InvalidEntityStateError(
                f"Invalid status transition from {self.status.value} to {target.value}"
            )

        if target == self.status:
            self.ensure_distribution_invariant()
            return

        resolved_partner = partner_id or self.assigned_partner_id
        if target == VehicleStatus.DISTRIBUTED and resolved_partner is None:
            raise InvalidEntityStateError("Assigned partner is required when distributing a vehicle")
        if target == VehicleStatus.SOLD and self.selling_price is None:
            raise InvalidEntityStateError("Selling price is required before marking as sold")

        now = now or datetime.now()
        previous = self.status

        if target == VehicleStatus.DISTRIBUTED:
            self.assigned_partner_id = resolved_partner
            if self.distributed_at is None:
                self.distributed_at = now
        elif target != VehicleStatus.SOLD:
            self.assigned_partner_id = None

        self.status = target
        self.updated_at = now
        self.ensure_distribution_invariant()

        logger.info(
            "Vehicle %s moved from %s to %s",
            self.vehicle_id,
            previous.value,
            target.value,
            extra={"extra": {"vehicle_id": self.vehicle_id, "status": target.value}},
        )

    def assign_partner(self, partner_id: str, now: datetime | None = None) -> None:
        """Hand a READY_FOR_DISTRIBUTION vehicle to a partner.

        Raises
        ------
        InvalidEntityStateError
            If the vehicle is not ready for distribution. The vehicle is left
            untouched.
        """
        if self.status != VehicleStatus.READY_FOR_DISTRIBUTION:
            raise InvalidEntityStateError("Vehicle must be ready for distribution")
        if not partner_id:
            raise ValidationError("partner_id", "required.")

        now = now or datetime.now()
        self.assigned_partner_id = partner_id
        self.status = VehicleStatus.DISTRIBUTED
        if self.distributed_at is None:
            self.distributed_at = now
        self.updated_at = now
        self.ensure_distribution_invariant()

        logger.info(
            "Vehicle %s assigned to partner %s",
            self.vehicle_id,
            partner_id,
            extra={
                "extra": {
                    "vehicle_id": self.vehicle_id,
                    "status": self.status.value,
                    "partner_id": partner_id,
                }
            },
        )

    def update_selling_price(
        self,
        selling_price: Decimal,
        mark_sold: bool = True,
        now: datetime | None = None,
    ) -> None:
        """Record the selling price.

        With ``mark_sold`` the vehicle is also moved to SOLD as part of the
        same operation; without it the vehicle only has to be distributed
        already. All checks run before any field changes.
        """
        validate_required_money(selling_price, "selling_price")

        if mark_sold:
            if not self.is_status_transition_allowed(VehicleStatus.SOLD):
                raise InvalidEntityStateError(
                    f"Vehicle in status {self.status.value} cannot be sold"
                )
        elif not self.status.already_distributed:
            raise InvalidEntityStateError("Vehicle must be distributed before setting a selling price")

        now = now or datetime.now()
        self.selling_price = selling_price
        self.updated_at = now

        if mark_sold:
            self.transition_status(VehicleStatus.SOLD, now=now)
        else:
            self.ensure_distribution_invariant()

    def update_details(
        self,
        year: int,
        color: str,
        brand: str,
        model: str,
        supplier_source: SupplierSource,
        purchase_price: Decimal,
        freight_cost: Decimal,
        purchase_commission: Decimal,
        brand_id: str | None = None,
        model_id: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Replace the descriptive and purchase fields."""
        self.year = year
        self.color = color
        self.brand = brand
        self.model = model
        self.supplier_source = supplier_source
        self.purchase_price = purchase_price
        self.freight_cost = freight_cost
        self.purchase_commission = purchase_commission
        if brand_id is not None:
            self.brand_id = brand_id
        if model_id is not None:
            self.model_id = model_id
        self.updated_at = now or datetime.now()
        self.ensure_distribution_invariant()

    def update_linked_documents(
        self,
        invoice_document_id: str | None,
        payment_receipt_document_id: str | None,
    ) -> None:
        self.purchase_invoice_document_id = invoice_document_id
        self.purchase_payment_receipt_document_id = payment_receipt_document_id

    def ensure_services_editable(self) -> None:
        """Service entries are read-only after distribution."""
        if self.status.already_distributed:
            raise InvalidEntityStateError("Services are read-only after distribution")

    def ensure_distribution_invariant(self) -> None:
        """Fail loudly if status and partner assignment disagree."""
        if self.status.already_distributed and self.assigned_partner_id is None:
            raise InvalidEntityStateError(
                f"Assigned partner is required when vehicle is {self.status.value}"
            )
        if not self.status.already_distributed and self.assigned_partner_id is not None:
            raise InvalidEntityStateError("Assigned partner can only be set when vehicle is distributed")

    def calculate_total_yard_days(self, now: datetime | None = None) -> int:
        """Whole days spent in inventory, up to distribution or ``now``."""
        if self.status.already_distributed:
            last_date = self.distributed_at
        else:
            last_date = now or datetime.now()

        if self.created_at is None or last_date is None:
            return 0
        return max((last_date - self.created_at).days, 0)

    def total_cost(self, services_total: Decimal) -> Decimal:
        """Purchase price plus freight plus services."""
        return self.purchase_price + self.freight_cost + services_total
