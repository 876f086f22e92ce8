"""Base models shared across the registry."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Change feed envelope."""

    event_id: str
    event_type: str  # entity.action (e.g., bond.created)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # real_estate_id affected
    data: dict
    metadata: dict = field(default_factory=dict)
