"""Brand and model catalog entries."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Brand:
    """Vehicle manufacturer."""

    brand_id: str
    name: str
    created_at: datetime
    updated_at: datetime | None = None


@dataclass
class VehicleModel:
    """Model line of a brand."""

    model_id: str
    brand_id: str
    name: str
    created_at: datetime
    updated_at: datetime | None = None
