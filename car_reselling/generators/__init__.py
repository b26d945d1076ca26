"""Sample inventory generators."""

from car_reselling.generators.base import BaseGenerator
from car_reselling.generators.vehicle import (
    PartnerGenerator,
    ServiceEntryGenerator,
    VehicleGenerator,
)

__all__ = [
    "BaseGenerator",
    "PartnerGenerator",
    "ServiceEntryGenerator",
    "VehicleGenerator",
]
