"""Partner registration."""

import uuid
from datetime import datetime
from decimal import Decimal

from car_reselling.models import Partner
from car_reselling.models.money import validate_optional_money
from car_reselling.services.base import BaseService, validate_required_text


class PartnerService(BaseService):
    """Register and list resale partners."""

    def create_partner(
        self,
        name: str,
        city: str,
        commission_rate: Decimal | None = None,
    ) -> Partner:
        partner_name = validate_required_text(name, "name")
        partner_city = validate_required_text(city, "city")
        validate_optional_money(commission_rate, "commission_rate")

        now = datetime.now()
        partner = Partner(
            partner_id=str(uuid.uuid4()),
            name=partner_name,
            city=partner_city,
            commission_rate=commission_rate,
            created_at=now,
            updated_at=now,
        )
        self.store.add_partner(partner)
        return partner

    def list_partners(self) -> list[Partner]:
        """All partners ordered by name."""
        return sorted(self.store.partners.values(), key=lambda p: p.name)
