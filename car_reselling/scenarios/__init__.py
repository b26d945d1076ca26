"""Scenarios for generating realistic resale inventories."""

from car_reselling.scenarios.lot_turnover import LotTurnoverScenario

__all__ = ["LotTurnoverScenario"]
