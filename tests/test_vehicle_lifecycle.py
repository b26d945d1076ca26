"""Tests for the Vehicle lifecycle: transitions, distribution and sale."""

from datetime import datetime
from decimal import Decimal

import pytest

from car_reselling.exceptions import InvalidEntityStateError, ValidationError
from car_reselling.models import VehicleStatus

NOW = datetime(2024, 4, 1, 12, 0)


class TestTransitionStatus:
    """Tests for Vehicle.transition_status."""

    def test_forward_step(self, make_vehicle) -> None:
        vehicle = make_vehicle()

        vehicle.transition_status(VehicleStatus.IN_SERVICE, now=NOW)

        assert vehicle.status == VehicleStatus.IN_SERVICE
        assert vehicle.updated_at == NOW

    def test_skip_rejected_and_vehicle_unchanged(self, make_vehicle) -> None:
        vehicle = make_vehicle()

        with pytest.raises(InvalidEntityStateError, match="IN_LOT to DISTRIBUTED"):
            vehicle.transition_status(VehicleStatus.DISTRIBUTED, partner_id="partner-001")

        assert vehicle.status == VehicleStatus.IN_LOT
        assert vehicle.assigned_partner_id is None
        assert vehicle.distributed_at is None

    def test_backward_rejected(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.READY_FOR_DISTRIBUTION)

        with pytest.raises(InvalidEntityStateError):
            vehicle.transition_status(VehicleStatus.IN_SERVICE)

    def test_self_transition_is_noop(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.IN_SERVICE)

        vehicle.transition_status(VehicleStatus.IN_SERVICE, now=NOW)

        assert vehicle.status == VehicleStatus.IN_SERVICE
        assert vehicle.updated_at is None

    def test_sold_self_transition_allowed(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.SOLD, selling_price=Decimal("15000.00"))

        vehicle.transition_status(VehicleStatus.SOLD)

        assert vehicle.status == VehicleStatus.SOLD
        assert vehicle.assigned_partner_id == "partner-001"

    def test_distribute_requires_partner(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.READY_FOR_DISTRIBUTION)

        with pytest.raises(InvalidEntityStateError, match="partner is required"):
            vehicle.transition_status(VehicleStatus.DISTRIBUTED)

        assert vehicle.status == VehicleStatus.READY_FOR_DISTRIBUTION

    def test_distribute_with_partner(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.READY_FOR_DISTRIBUTION)

        vehicle.transition_status(VehicleStatus.DISTRIBUTED, partner_id="partner-002", now=NOW)

        assert vehicle.status == VehicleStatus.DISTRIBUTED
        assert vehicle.assigned_partner_id == "partner-002"
        assert vehicle.distributed_at == NOW

    def test_sold_requires_selling_price(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.DISTRIBUTED)

        with pytest.raises(InvalidEntityStateError, match="Selling price"):
            vehicle.transition_status(VehicleStatus.SOLD)

        assert vehicle.status == VehicleStatus.DISTRIBUTED

    def test_sold_keeps_partner_and_distribution_date(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.DISTRIBUTED, selling_price=Decimal("15000.00"))
        distributed_at = vehicle.distributed_at

        vehicle.transition_status(VehicleStatus.SOLD, now=NOW)

        assert vehicle.status == VehicleStatus.SOLD
        assert vehicle.assigned_partner_id == "partner-001"
        assert vehicle.distributed_at == distributed_at

    def test_illegal_transition_after_sale_keeps_distribution_date(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.SOLD, selling_price=Decimal("15000.00"))
        distributed_at = vehicle.distributed_at

        with pytest.raises(InvalidEntityStateError):
            vehicle.transition_status(VehicleStatus.DISTRIBUTED, partner_id="partner-002")

        assert vehicle.distributed_at == distributed_at
        assert vehicle.assigned_partner_id == "partner-001"

    def test_full_walk(self, make_vehicle) -> None:
        vehicle = make_vehicle()

        vehicle.transition_status(VehicleStatus.IN_SERVICE)
        vehicle.transition_status(VehicleStatus.READY_FOR_DISTRIBUTION)
        vehicle.transition_status(VehicleStatus.DISTRIBUTED, partner_id="partner-001")
        vehicle.selling_price = Decimal("15000.00")
        vehicle.transition_status(VehicleStatus.SOLD)

        assert vehicle.status == VehicleStatus.SOLD
        assert vehicle.assigned_partner_id == "partner-001"


class TestAssignPartner:
    """Tests for Vehicle.assign_partner."""

    def test_assign_from_ready(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.READY_FOR_DISTRIBUTION)

        vehicle.assign_partner("partner-001", now=NOW)

        assert vehicle.status == VehicleStatus.DISTRIBUTED
        assert vehicle.assigned_partner_id == "partner-001"
        assert vehicle.distributed_at == NOW
        assert vehicle.updated_at == NOW

    @pytest.mark.parametrize(
        "status",
        [VehicleStatus.IN_LOT, VehicleStatus.IN_SERVICE, VehicleStatus.DISTRIBUTED, VehicleStatus.SOLD],
    )
    def test_rejected_outside_ready(self, make_vehicle, status: VehicleStatus) -> None:
        vehicle = make_vehicle(status, selling_price=Decimal("1.00"))
        before = (vehicle.status, vehicle.assigned_partner_id, vehicle.distributed_at)

        with pytest.raises(InvalidEntityStateError, match="ready for distribution"):
            vehicle.assign_partner("partner-002")

        assert (vehicle.status, vehicle.assigned_partner_id, vehicle.distributed_at) == before

    def test_empty_partner_rejected(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.READY_FOR_DISTRIBUTION)

        with pytest.raises(ValidationError):
            vehicle.assign_partner("")

        assert vehicle.status == VehicleStatus.READY_FOR_DISTRIBUTION


class TestUpdateSellingPrice:
    """Tests for Vehicle.update_selling_price."""

    def test_marks_sold(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.DISTRIBUTED)

        vehicle.update_selling_price(Decimal("15000.00"), now=NOW)

        assert vehicle.selling_price == Decimal("15000.00")
        assert vehicle.status == VehicleStatus.SOLD
        assert vehicle.updated_at == NOW

    def test_mark_sold_rejected_before_distribution(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.READY_FOR_DISTRIBUTION)

        with pytest.raises(InvalidEntityStateError, match="cannot be sold"):
            vehicle.update_selling_price(Decimal("15000.00"))

        assert vehicle.selling_price is None
        assert vehicle.status == VehicleStatus.READY_FOR_DISTRIBUTION

    def test_reprice_sold_vehicle(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.SOLD, selling_price=Decimal("15000.00"))

        vehicle.update_selling_price(Decimal("14500.00"))

        assert vehicle.selling_price == Decimal("14500.00")
        assert vehicle.status == VehicleStatus.SOLD

    def test_without_mark_sold_keeps_status(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.DISTRIBUTED)

        vehicle.update_selling_price(Decimal("15000.00"), mark_sold=False)

        assert vehicle.selling_price == Decimal("15000.00")
        assert vehicle.status == VehicleStatus.DISTRIBUTED

    def test_without_mark_sold_requires_distribution(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.IN_SERVICE)

        with pytest.raises(InvalidEntityStateError, match="distributed"):
            vehicle.update_selling_price(Decimal("15000.00"), mark_sold=False)

        assert vehicle.selling_price is None

    def test_negative_price_rejected(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.DISTRIBUTED)

        with pytest.raises(ValidationError, match="selling_price"):
            vehicle.update_selling_price(Decimal("-1"))

    @pytest.mark.parametrize("price", [15000.0, Decimal("NaN"), Decimal("Infinity")])
    def test_non_decimal_or_non_finite_price_rejected(self, make_vehicle, price) -> None:
        vehicle = make_vehicle(VehicleStatus.DISTRIBUTED)

        with pytest.raises(ValidationError, match="selling_price"):
            vehicle.update_selling_price(price)

        assert vehicle.selling_price is None
        assert vehicle.status == VehicleStatus.DISTRIBUTED

        assert vehicle.status == VehicleStatus.DISTRIBUTED


class TestDistributionInvariant:
    """A partner is assigned exactly while DISTRIBUTED or SOLD."""

    def test_partner_without_distribution(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.IN_SERVICE)
        vehicle.assigned_partner_id = "partner-001"

        with pytest.raises(InvalidEntityStateError):
            vehicle.ensure_distribution_invariant()

    def test_distribution_without_partner(self, make_vehicle) -> None:
        vehicle = make_vehicle(VehicleStatus.SOLD, selling_price=Decimal("1.00"))
        vehicle.assigned_partner_id = None

        with pytest.raises(InvalidEntityStateError):
            vehicle.ensure_distribution_invariant()
