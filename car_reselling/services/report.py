"""Report orchestration: fetch filtered rows and hand them to the engine."""

import logging

from car_reselling.engine.distribution import build_distributed_report
from car_reselling.engine.sales import VehicleSalesCalculator
from car_reselling.models import DistributedVehiclesReport, ReportFilter, SoldVehiclesReport
from car_reselling.store import InventoryStore

logger = logging.getLogger(__name__)


class ReportService:
    """Distributed and sold vehicle reports."""

    def __init__(
        self,
        store: InventoryStore,
        sales_calculator: VehicleSalesCalculator | None = None,
    ) -> None:
        self.store = store
        self.sales_calculator = sales_calculator or VehicleSalesCalculator()

    def distributed_vehicles_report(
        self, report_filter: ReportFilter | None = None
    ) -> DistributedVehiclesReport:
        rows = self.store.distributed_vehicle_rows(report_filter)
        logger.info("Building distributed vehicles report from %d rows", len(rows))
        return build_distributed_report(rows)

    def sold_vehicles_report(self, report_filter: ReportFilter | None = None) -> SoldVehiclesReport:
        rows = self.store.sold_vehicle_rows(report_filter)
        logger.info("Building sold vehicles report from %d rows", len(rows))
        return self.sales_calculator.build_report(rows)
