"""Generators for purchased vehicles, partners and service costs."""

import random
import string
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterator

from car_reselling.generators.base import BaseGenerator
from car_reselling.models import Partner, ServiceEntry, ServiceType, SupplierSource, Vehicle


class VehicleGenerator(BaseGenerator):
    """Generate purchased vehicles with Brazilian plates."""

    # Brand -> (models, purchase price range in thousands of BRL)
    CATALOG = {
        "Volkswagen": (["Gol", "Polo", "T-Cross", "Virtus", "Saveiro"], (35, 120)),
        "Chevrolet": (["Onix", "Tracker", "S10", "Spin", "Cruze"], (40, 160)),
        "Fiat": (["Argo", "Mobi", "Strada", "Toro", "Pulse"], (30, 140)),
        "Toyota": (["Corolla", "Hilux", "Yaris", "Corolla Cross"], (70, 250)),
        "Hyundai": (["HB20", "Creta", "Tucson"], (45, 150)),
        "Honda": (["Civic", "City", "HR-V", "Fit"], (60, 170)),
        "Renault": (["Kwid", "Sandero", "Duster", "Logan"], (30, 100)),
        "Jeep": (["Renegade", "Compass", "Commander"], (80, 220)),
    }

    COLORS = ["Branco", "Preto", "Prata", "Cinza", "Vermelho", "Azul", "Marrom", "Verde"]

    # AUCTION and DEALERSHIP purchases dominate
    SOURCE_WEIGHTS = {
        SupplierSource.AUCTION: 0.35,
        SupplierSource.DEALERSHIP: 0.25,
        SupplierSource.INTERNET: 0.20,
        SupplierSource.PRIVATE_SELLER: 0.12,
        SupplierSource.PERSONAL_CONTACT: 0.08,
    }

    def plate(self, mercosur: bool | None = None) -> str:
        """Random plate in the old (ABC1234) or Mercosur (ABC1D23) format."""
        if mercosur is None:
            mercosur = random.random() < 0.6
        pattern = "???#?##" if mercosur else "???####"
        return self.fake.bothify(pattern, letters=string.ascii_uppercase)

    def generate(self, max_age_days: int = 120) -> Vehicle:
        """Generate a vehicle still in the lot.

        Parameters
        ----------
        max_age_days : int
            Upper bound for how long ago the vehicle was bought.

        Returns
        -------
        Vehicle
            Generated vehicle with status IN_LOT.
        """
        brand = random.choice(list(self.CATALOG))
        models, (low, high) = self.CATALOG[brand]
        purchase_price = Decimal(random.randint(low * 10, high * 10) * 100)
        current_year = datetime.now().year

        return Vehicle(
            vehicle_id=self.fake.uuid4(),
            license_plate=self.plate(),
            renavam=self.fake.numerify("###########"),
            vin=self.fake.bothify("9??##########?##", letters="ABCDEFGHJKLMNPRSTUVWXYZ").upper(),
            year=random.randint(current_year - 12, current_year),
            color=random.choice(self.COLORS),
            brand=brand,
            model=random.choice(models),
            supplier_source=random.choices(
                list(self.SOURCE_WEIGHTS), weights=list(self.SOURCE_WEIGHTS.values())
            )[0],
            purchase_price=purchase_price,
            freight_cost=Decimal(random.choice([0, 0, 250, 400, 600, 900])),
            purchase_commission=(purchase_price * Decimal("0.02")).quantize(Decimal("0.01")),
            created_at=datetime.now() - timedelta(days=random.randint(0, max_age_days)),
        )

    def generate_batch(self, count: int) -> Iterator[Vehicle]:
        for _ in range(count):
            yield self.generate()


class PartnerGenerator(BaseGenerator):
    """Generate resale partners (dealers)."""

    def generate(self) -> Partner:
        city = self.fake.city()
        return Partner(
            partner_id=self.fake.uuid4(),
            name=f"{self.fake.last_name()} Veículos {city}",
            city=city,
            commission_rate=Decimal(random.choice(["0.02", "0.03", "0.05"])),
            created_at=datetime.now() - timedelta(days=random.randint(180, 1500)),
        )


class ServiceEntryGenerator(BaseGenerator):
    """Generate service costs for a vehicle in the lot."""

    # Service type -> (value range in BRL, sample descriptions)
    SERVICES = {
        ServiceType.MECHANICAL: ((300, 4000), ["Revisão completa", "Troca de embreagem", "Troca de óleo e filtros"]),
        ServiceType.PAINT: ((400, 3500), ["Pintura do para-choque", "Polimento geral"]),
        ServiceType.BODYWORK: ((500, 5000), ["Funilaria da porta", "Reparo de amassado"]),
        ServiceType.ELECTRICAL: ((150, 1800), ["Troca de bateria", "Revisão elétrica"]),
        ServiceType.UPHOLSTERY: ((200, 2000), ["Higienização interna", "Reforma dos bancos"]),
        ServiceType.WINDOWS: ((150, 1200), ["Troca do para-brisa", "Película nos vidros"]),
    }

    def generate(self, vehicle_id: str, since: date | None = None) -> ServiceEntry:
        """Generate a service entry.

        Parameters
        ----------
        vehicle_id : str
            Vehicle receiving the service.
        since : date | None
            Earliest date the service could have been performed.
        """
        service_type = random.choice(list(self.SERVICES))
        (low, high), descriptions = self.SERVICES[service_type]
        today = date.today()
        start = since or today - timedelta(days=60)
        span = max((today - start).days, 0)
        now = datetime.now()

        return ServiceEntry(
            service_id=self.fake.uuid4(),
            vehicle_id=vehicle_id,
            service_type=service_type,
            description=random.choice(descriptions),
            service_value=Decimal(random.randint(low, high)),
            performed_at=start + timedelta(days=random.randint(0, span)),
            created_at=now,
            updated_at=now,
        )

    def generate_for_vehicle(self, vehicle_id: str, max_services: int = 3) -> list[ServiceEntry]:
        return [self.generate(vehicle_id) for _ in range(random.randint(0, max_services))]
