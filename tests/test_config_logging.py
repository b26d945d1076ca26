"""Tests for config and logging."""

import io
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from car_reselling.config import (
    CarResellingConfig,
    KafkaConfig,
    LifecycleConfig,
    OutputConfig,
    TaxRates,
)
from car_reselling.exceptions import ConfigurationError
from car_reselling.logging import JsonFormatter, setup_logging
from car_reselling.models import VehicleStatus


class TestTaxRates:
    """Tests for TaxRates."""

    def test_default_values(self) -> None:
        rates = TaxRates()

        assert rates.icms_rate == Decimal("0.12")
        assert rates.icms_base_rate == Decimal("0.05")
        assert rates.pis_rate == Decimal("0.0065")
        assert rates.cofins_rate == Decimal("0.03")
        assert rates.csll_rate == Decimal("0.0288")
        assert rates.irpj_rate == Decimal("0.048")
        assert rates.commission_tax_rate == Decimal("0.15")

    def test_frozen(self) -> None:
        rates = TaxRates()
        with pytest.raises(AttributeError):
            rates.icms_rate = Decimal("0.2")  # type: ignore[misc]

    def test_negative_rate_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="pis_rate"):
            TaxRates(pis_rate=Decimal("-0.01"))

    def test_float_rate_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a Decimal"):
            TaxRates(icms_rate=0.12)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_non_finite_rate_rejected(self, value: str) -> None:
        """Non-finite rates fail with a config error, not a decimal signal."""
        with pytest.raises(ConfigurationError, match="icms_rate must be a finite rate"):
            TaxRates(icms_rate=Decimal(value))

    def test_from_env_overrides(self) -> None:
        with patch.dict("os.environ", {"TAX_ICMS_RATE": "0.18", "TAX_IRPJ_RATE": " 0.05 "}):
            rates = TaxRates.from_env()

        assert rates.icms_rate == Decimal("0.18")
        assert rates.irpj_rate == Decimal("0.05")
        assert rates.pis_rate == Decimal("0.0065")

    def test_from_env_invalid_decimal(self) -> None:
        with patch.dict("os.environ", {"TAX_COFINS_RATE": "abc"}):
            with pytest.raises(ConfigurationError, match="TAX_COFINS_RATE"):
                TaxRates.from_env()

    def test_from_env_nan_rejected(self) -> None:
        with patch.dict("os.environ", {"TAX_PIS_RATE": "nan"}):
            with pytest.raises(ConfigurationError, match="pis_rate"):
                TaxRates.from_env()


class TestKafkaConfig:
    """Tests for KafkaConfig."""

    def test_default_values(self) -> None:
        config = KafkaConfig()

        assert config.bootstrap_servers == "localhost:9092"
        assert config.acks == "all"
        assert config.compression == "snappy"
        assert config.topic_prefix == "dev.resale"

    def test_to_dict(self) -> None:
        config = KafkaConfig(bootstrap_servers="kafka:9092", acks="1", linger_ms=10)

        result = config.to_dict()

        assert result == {
            "bootstrap.servers": "kafka:9092",
            "acks": "1",
            "batch.size": 16384,
            "linger.ms": 10,
            "compression.type": "snappy",
            "retries": 3,
        }


class TestCarResellingConfig:
    """Tests for the root configuration."""

    def test_default_values(self) -> None:
        config = CarResellingConfig()

        assert isinstance(config.taxes, TaxRates)
        assert config.lifecycle == LifecycleConfig(selling_price_marks_sold=True)
        assert config.output == OutputConfig()
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env(self) -> None:
        env = {
            "SELLING_PRICE_MARKS_SOLD": "false",
            "KAFKA_BOOTSTRAP_SERVERS": "broker:29092",
            "TOPIC_PREFIX": "prod.resale",
            "OUTPUT_DIR": "/tmp/resale",
            "PRETTY_JSON": "true",
            "SEED": "7",
            "LOG_LEVEL": "DEBUG",
            "TAX_ICMS_RATE": "0.17",
        }
        with patch.dict("os.environ", env):
            config = CarResellingConfig.from_env()

        assert config.lifecycle.selling_price_marks_sold is False
        assert config.kafka.bootstrap_servers == "broker:29092"
        assert config.kafka.topic_prefix == "prod.resale"
        assert config.output.json_output_dir == Path("/tmp/resale")
        assert config.output.pretty_json is True
        assert config.seed == 7
        assert config.log_level == "DEBUG"
        assert config.taxes.icms_rate == Decimal("0.17")

    def test_from_env_invalid_seed(self) -> None:
        with patch.dict("os.environ", {"SEED": "not-a-number"}):
            with pytest.raises(ConfigurationError, match="SEED"):
                CarResellingConfig.from_env()


class TestLogging:
    """Tests for logging setup."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_setup_logging_standard(self) -> None:
        setup_logging("DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("car_reselling").level == logging.DEBUG
        assert logging.getLogger("confluent_kafka").level == logging.WARNING

    def test_setup_logging_json(self) -> None:
        setup_logging("INFO", format_type="json")

        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)

    def test_setup_logging_unknown_level_defaults_to_info(self) -> None:
        setup_logging("NOPE")
        assert logging.getLogger().level == logging.INFO

    def test_json_formatter_output(self) -> None:
        formatter = JsonFormatter()
        record = logging.LogRecord(
            name="car_reselling.models.vehicle",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Vehicle %s moved",
            args=("veh-001",),
            exc_info=None,
        )
        record.extra = {"vehicle_id": "veh-001"}

        data = json.loads(formatter.format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "car_reselling.models.vehicle"
        assert data["message"] == "Vehicle veh-001 moved"
        assert data["vehicle_id"] == "veh-001"

    def test_json_formatter_exception(self) -> None:
        formatter = JsonFormatter()
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        data = json.loads(formatter.format(record))
        assert "ValueError: bad" in data["exception"]

    def test_setup_logging_writes_to_given_stream(self) -> None:
        stream = io.StringIO()
        setup_logging("INFO", format_type="json", stream=stream)

        logging.getLogger("car_reselling.test").info("lot opened")

        data = json.loads(stream.getvalue().splitlines()[-1])
        assert data["message"] == "lot opened"
        assert data["logger"] == "car_reselling.test"

    def test_json_formatter_ignores_non_mapping_extra(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "plain", (), None)
        record.extra = "not a mapping"

        data = json.loads(JsonFormatter().format(record))
        assert "extra" not in data
        assert data["message"] == "plain"

    def test_vehicle_transition_context_in_json(self, make_vehicle, caplog) -> None:
        """Lifecycle log records carry vehicle id and status into the JSON output."""
        vehicle = make_vehicle(VehicleStatus.IN_LOT)

        with caplog.at_level(logging.INFO, logger="car_reselling.models.vehicle"):
            vehicle.transition_status(VehicleStatus.IN_SERVICE)

        record = next(r for r in caplog.records if r.name == "car_reselling.models.vehicle")
        data = json.loads(JsonFormatter().format(record))
        assert data["vehicle_id"] == "veh-001"
        assert data["status"] == "IN_SERVICE"

    def test_partner_assignment_context_in_json(self, make_vehicle, caplog) -> None:
        vehicle = make_vehicle(VehicleStatus.READY_FOR_DISTRIBUTION)

        with caplog.at_level(logging.INFO, logger="car_reselling.models.vehicle"):
            vehicle.assign_partner("partner-001")

        data = json.loads(JsonFormatter().format(caplog.records[-1]))
        assert data["vehicle_id"] == "veh-001"
        assert data["status"] == "DISTRIBUTED"
        assert data["partner_id"] == "partner-001"
