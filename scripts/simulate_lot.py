#!/usr/bin/env python3
"""Simulate a resale lot and export its inventory, events and reports.

Runs ``LotTurnoverScenario`` and writes the resulting entities, lifecycle
events and the distributed/sold vehicle reports to the chosen sink.

Usage::

    python scripts/simulate_lot.py --vehicles 200 --partners 8 --sink json
    python scripts/simulate_lot.py --sink kafka --kafka-bootstrap localhost:9092
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from car_reselling.config import CarResellingConfig
from car_reselling.exceptions import CarResellingError
from car_reselling.logging import setup_logging
from car_reselling.scenarios import LotTurnoverScenario
from car_reselling.services import ReportService
from car_reselling.sinks import ConsoleSink, JsonFileSink, KafkaSink
from car_reselling.sinks.kafka import (
    DISTRIBUTED_REPORT_TOPIC,
    SOLD_REPORT_TOPIC,
    VEHICLE_EVENTS_TOPIC,
)
from car_reselling.store import InventoryStore

logger = logging.getLogger("car_reselling.scripts.simulate_lot")


def export_to_sink(sink, store: InventoryStore, topic=lambda name: name) -> None:
    """Write entities, events and both reports to a sink."""
    reports = ReportService(store)
    sold = reports.sold_vehicles_report()
    distributed = reports.distributed_vehicles_report()

    sink.write_batch(topic("partners"), list(store.partners.values()))
    sink.write_batch(topic("vehicles"), list(store.vehicles.values()))
    sink.write_batch(topic("services"), list(store.services.values()))
    sink.write_batch(topic(VEHICLE_EVENTS_TOPIC), store.events)
    sink.write_batch(topic(SOLD_REPORT_TOPIC), [sold])
    sink.write_batch(topic(DISTRIBUTED_REPORT_TOPIC), [distributed])

    logger.info(
        "Sold %d vehicles for %s (profit %s); %d vehicles with partners",
        sold.total_vehicles_sold,
        sold.total_sold_value,
        sold.profit,
        distributed.overall_vehicles_count,
    )


def main() -> None:
    """Main entry point."""
    config = CarResellingConfig.from_env()

    parser = argparse.ArgumentParser(description="Simulate a resale lot and export the results")
    parser.add_argument(
        "--vehicles",
        type=int,
        default=50,
        help="Number of vehicles to purchase (default: 50)",
    )
    parser.add_argument(
        "--partners",
        type=int,
        default=5,
        help="Number of resale partners (default: 5)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed,
        help="Random seed for reproducibility (default: SEED env var)",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json", "kafka"],
        default="console",
        help="Where to export the results (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for --sink json (default: OUTPUT_DIR env var or ./output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=config.kafka.bootstrap_servers,
        help="Kafka bootstrap servers for --sink kafka",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default="standard",
        help="Log output format",
    )
    args = parser.parse_args()

    setup_logging(config.log_level, args.log_format)

    scenario = LotTurnoverScenario(
        num_vehicles=args.vehicles,
        num_partners=args.partners,
        seed=args.seed,
        tax_rates=config.taxes,
        lifecycle=config.lifecycle,
    )

    try:
        store = scenario.generate()

        if args.sink == "json":
            sink = JsonFileSink(args.output_dir, pretty=config.output.pretty_json)
            export_to_sink(sink, store)
        elif args.sink == "kafka":
            config.kafka.bootstrap_servers = args.kafka_bootstrap
            sink = KafkaSink(config.kafka)
            export_to_sink(sink, store, topic=sink.topic)
        else:
            sink = ConsoleSink(pretty=True, max_records=5)
            export_to_sink(sink, store)

        sink.close()
    except CarResellingError as exc:
        logger.error("Simulation failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
