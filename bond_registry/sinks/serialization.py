"""Shared serialization utilities for sinks."""

from dataclasses import asdict
from datetime import date, datetime
from enum import Enum
from typing import Any

from bond_registry.models import Event


def event_to_dict(event: Event) -> dict:
    """Convert an event envelope to a JSON-ready dict."""
    return {key: serialize_value(value) for key, value in asdict(event).items()}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Enum):
        return value.value
    elif isinstance(value, (datetime, date)):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value
