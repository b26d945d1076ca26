"""Configuration management for car-reselling."""

import os
from dataclasses import dataclass, field, fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from car_reselling.exceptions import ConfigurationError


@dataclass(frozen=True)
class TaxRates:
    """Tax rates applied at sale time.

    ``icms`` is levied on gross revenue (selling price times ``icms_base_rate``),
    the other four on the taxable margin. ``commission_tax_rate`` is the income
    tax withheld over the purchase commission.
    """

    icms_rate: Decimal = Decimal("0.12")
    icms_base_rate: Decimal = Decimal("0.05")
    pis_rate: Decimal = Decimal("0.0065")
    cofins_rate: Decimal = Decimal("0.03")
    csll_rate: Decimal = Decimal("0.0288")
    irpj_rate: Decimal = Decimal("0.048")
    commission_tax_rate: Decimal = Decimal("0.15")

    def __post_init__(self) -> None:
        for rate_field in fields(self):
            value = getattr(self, rate_field.name)
            if not isinstance(value, Decimal):
                raise ConfigurationError(f"{rate_field.name} must be a Decimal, got {type(value).__name__}")
            if not value.is_finite():
                raise ConfigurationError(f"{rate_field.name} must be a finite rate")
            if value < 0:
                raise ConfigurationError(f"{rate_field.name} cannot be negative")

    @classmethod
    def from_env(cls) -> "TaxRates":
        """Create tax rates from ``TAX_<NAME>`` environment variables."""
        overrides = {}
        for rate_field in fields(cls):
            env_name = "TAX_" + rate_field.name.upper()
            raw = os.getenv(env_name)
            if raw is not None:
                overrides[rate_field.name] = _parse_decimal(env_name, raw)
        return cls(**overrides)


@dataclass(frozen=True)
class LifecycleConfig:
    """Vehicle lifecycle behaviour switches."""

    # Setting a selling price also moves the vehicle to SOLD
    selling_price_marks_sold: bool = True


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "dev.resale"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class CarResellingConfig:
    """Main configuration for car-reselling."""

    taxes: TaxRates = field(default_factory=TaxRates)
    lifecycle: LifecycleConfig = field(default_factory=LifecycleConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CarResellingConfig":
        """Create config from environment variables."""
        lifecycle = LifecycleConfig(
            selling_price_marks_sold=os.getenv("SELLING_PRICE_MARKS_SOLD", "true").lower() == "true",
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.resale"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as exc:
            raise ConfigurationError(f"SEED must be an integer, got {seed_str!r}") from exc

        return cls(
            taxes=TaxRates.from_env(),
            lifecycle=lifecycle,
            kafka=kafka,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _parse_decimal(name: str, raw: str) -> Decimal:
    try:
        return Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} is not a valid decimal: {raw!r}") from exc
