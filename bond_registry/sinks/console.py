"""Console sink for debugging and development."""

import json

from bond_registry.models import Event
from bond_registry.sinks.serialization import event_to_dict


class ConsoleSink:
    """Print change feed events to stdout."""

    def __init__(self, pretty: bool = False) -> None:
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def publish(self, event: Event) -> None:
        """Print one event as JSON."""
        data = event_to_dict(event)
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            print(json.dumps(data, ensure_ascii=False))
        self._counts[event.event_type] = self._counts.get(event.event_type, 0) + 1

    def close(self) -> None:
        """Print summary."""
        for event_type, count in self._counts.items():
            print(f"  {event_type}: {count} events")
