"""Group distributed vehicles by partner."""

import logging
from decimal import Decimal
from typing import Iterable

from car_reselling.models.report import (
    DistributedVehicleRow,
    DistributedVehiclesReport,
    ReportPartnerGroup,
    ReportVehicleItem,
)

logger = logging.getLogger(__name__)


def build_distributed_report(rows: Iterable[DistributedVehicleRow]) -> DistributedVehiclesReport:
    """Group rows by partner, in the order partners first appear.

    Partner value is the sum of purchase prices; the per-vehicle
    ``total_cost`` also includes freight and services.
    """
    grouped: dict[str, ReportPartnerGroup] = {}

    for row in rows:
        group = grouped.get(row.partner_id)
        if group is None:
            group = ReportPartnerGroup(partner_id=row.partner_id, partner_name=row.partner_name)
            grouped[row.partner_id] = group

        group.vehicles.append(
            ReportVehicleItem(
                vehicle_id=row.vehicle_id,
                license_plate=row.license_plate,
                brand=row.brand,
                model=row.model,
                year=row.year,
                distributed_at=row.distributed_at,
                purchase_price=row.purchase_price,
                total_cost=row.purchase_price + row.freight_cost + row.services_total,
            )
        )
        group.partner_vehicles_total_value += row.purchase_price

    report = DistributedVehiclesReport()
    overall_total = Decimal("0.00")
    for group in grouped.values():
        group.partner_vehicles_count = len(group.vehicles)
        report.partners.append(group)
        report.overall_vehicles_count += group.partner_vehicles_count
        overall_total += group.partner_vehicles_total_value
    report.overall_vehicles_total_value = overall_total

    logger.debug(
        "Distributed report built: partners=%d, vehicles=%d",
        len(report.partners),
        report.overall_vehicles_count,
    )
    return report
