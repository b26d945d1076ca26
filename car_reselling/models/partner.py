"""Resale partner model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Partner:
    """Dealer that receives distributed vehicles for resale."""

    partner_id: str
    name: str
    city: str
    created_at: datetime
    commission_rate: Decimal | None = None
    updated_at: datetime | None = None
