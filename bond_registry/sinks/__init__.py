"""Change feed sinks for bond lifecycle events."""

from bond_registry.sinks.console import ConsoleSink
from bond_registry.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "KafkaSink"]
