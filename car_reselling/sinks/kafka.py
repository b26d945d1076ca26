"""Kafka sink for publishing lifecycle events and reports."""

import json
import logging
from dataclasses import dataclass, is_dataclass
from typing import Any

from confluent_kafka import Producer

from car_reselling.config import KafkaConfig
from car_reselling.exceptions import SinkError
from car_reselling.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

# Topic suffixes, published under ``KafkaConfig.topic_prefix``
VEHICLE_EVENTS_TOPIC = "vehicle-events"
SOLD_REPORT_TOPIC = "sold-vehicles-report"
DISTRIBUTED_REPORT_TOPIC = "distributed-vehicles-report"


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Fraction of acknowledged messages that were delivered."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Output records to Kafka topics as JSON, keyed per topic."""

    # Topic suffix to key field mapping
    KEY_FIELDS = {
        VEHICLE_EVENTS_TOPIC: "subject",
        SOLD_REPORT_TOPIC: "vehicle_id",
        DISTRIBUTED_REPORT_TOPIC: "partner_id",
        "vehicles": "vehicle_id",
        "services": "vehicle_id",
        "partners": "partner_id",
    }

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def topic(self, name: str) -> str:
        """Full topic name for a suffix, e.g. ``dev.resale.vehicle-events``."""
        return f"{self.config.topic_prefix}.{name}" if self.config.topic_prefix else name

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def _get_key(self, topic: str, record: Any) -> str | None:
        """Extract message key from record based on topic suffix."""
        key_field = self.KEY_FIELDS.get(topic.rsplit(".", 1)[-1])
        if not key_field:
            return None

        if is_dataclass(record):
            value = getattr(record, key_field, None)
        elif isinstance(record, dict):
            value = record.get(key_field)
        else:
            return None
        return str(value) if value is not None else None

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to a Kafka topic."""
        value = json.dumps(to_dict(record), ensure_ascii=False).encode("utf-8")

        if key is None:
            key = self._get_key(topic, record)

        self.producer.produce(
            topic=topic,
            key=key.encode("utf-8") if key else None,
            value=value,
            callback=self._delivery_callback,
        )
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Write a batch of records to a Kafka topic."""
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, record)

        self.flush()
        logger.info(
            "Batch complete: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )

    def flush(self, timeout: float = 30.0) -> int:
        """Flush pending messages; returns the number still queued."""
        return self.producer.flush(timeout)

    def close(self) -> None:
        """Flush the producer and fail if any delivery failed.

        Raises
        ------
        SinkError
            If messages are still queued or were rejected by the broker.
        """
        remaining = self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d, success_rate=%.1f%%",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
            self.stats.success_rate * 100,
        )
        if remaining or self.stats.failed:
            raise SinkError(
                f"{self.stats.failed} deliveries failed, {remaining or 0} messages not flushed"
            )
