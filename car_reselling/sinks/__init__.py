"""Output sinks for exporting inventory data, events and reports."""

from car_reselling.sinks.console import ConsoleSink
from car_reselling.sinks.json_file import JsonFileSink
from car_reselling.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
