"""Sold vehicle settlement: per-vehicle profit and batch totals."""

import logging
from decimal import Decimal
from typing import Iterable

from car_reselling.engine.taxes import TaxCalculator, taxable_margin
from car_reselling.models.report import SoldVehicleItem, SoldVehicleRow, SoldVehiclesReport

logger = logging.getLogger(__name__)


class VehicleSalesCalculator:
    """Turn raw sold-vehicle rows into a settlement report."""

    def __init__(self, tax_calculator: TaxCalculator | None = None) -> None:
        self.tax_calculator = tax_calculator or TaxCalculator()

    def settle(self, row: SoldVehicleRow) -> SoldVehicleItem:
        """Compute the profit contribution of a single sold vehicle."""
        base_profit = row.selling_price - row.purchase_price
        taxes = self.tax_calculator.calculate_taxes(
            row.selling_price,
            taxable_margin(row.selling_price, row.purchase_price),
        )
        commission_income_tax = self.tax_calculator.calculate_commission_income_tax(
            row.purchase_commission
        )
        vehicle_profit = (
            base_profit
            - taxes.total_taxes
            - row.freight_cost
            - row.services_total
            - commission_income_tax
        )

        return SoldVehicleItem(
            vehicle_id=row.vehicle_id,
            license_plate=row.license_plate,
            brand=row.brand,
            model=row.model,
            year=row.year,
            sold_at=row.sold_at,
            selling_price=row.selling_price,
            total_taxes=taxes.total_taxes,
            services_total=row.services_total,
            purchase_commission=row.purchase_commission,
            commission_income_tax=commission_income_tax,
            vehicle_profit=vehicle_profit,
        )

    def build_report(self, rows: Iterable[SoldVehicleRow]) -> SoldVehiclesReport:
        """Settle every row and accumulate the totals.

        Profit is the sum of the per-vehicle profits, not a figure derived
        from the other totals.
        """
        report = SoldVehiclesReport()
        total_sold = Decimal("0.00")
        total_taxes = Decimal("0.00")
        total_services = Decimal("0.00")
        total_commission = Decimal("0.00")
        total_profit = Decimal("0.00")

        for row in rows:
            item = self.settle(row)
            report.vehicles.append(item)
            total_sold += item.selling_price
            total_taxes += item.total_taxes
            total_services += item.services_total
            total_commission += item.purchase_commission
            total_profit += item.vehicle_profit

        report.total_vehicles_sold = len(report.vehicles)
        report.total_sold_value = total_sold
        report.total_taxes_value = total_taxes
        report.total_service_value = total_services
        report.total_commission_value = total_commission
        report.profit = total_profit

        logger.debug(
            "Sold report built: vehicles=%d, sold=%s, profit=%s",
            report.total_vehicles_sold,
            total_sold,
            total_profit,
        )
        return report
