"""Tax and settlement calculations."""

from car_reselling.engine.distribution import build_distributed_report
from car_reselling.engine.sales import VehicleSalesCalculator
from car_reselling.engine.taxes import TaxCalculator, round_money, taxable_margin

__all__ = [
    "TaxCalculator",
    "VehicleSalesCalculator",
    "build_distributed_report",
    "round_money",
    "taxable_margin",
]
