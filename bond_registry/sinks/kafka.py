"""Kafka sink for the bond change feed."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from confluent_kafka import KafkaException, Producer

from bond_registry.config import KafkaConfig
from bond_registry.exceptions import SinkError
from bond_registry.models import Event
from bond_registry.sinks.serialization import event_to_dict

logger = logging.getLogger(__name__)


@dataclass
class FeedStats:
    """Per-sink delivery counters."""

    queued: int = 0
    delivered: int = 0
    failed: int = 0
    by_event_type: dict[str, int] = field(default_factory=dict)

    @property
    def pending(self) -> int:
        """Messages queued but not yet acknowledged either way."""
        return self.queued - self.delivered - self.failed


class KafkaSink:
    """Publish bond events to one topic, keyed by real estate id.

    Keying by ``subject`` keeps every event of one bond on one partition,
    so consumers see a bond's create before its transfers.
    """

    def __init__(self, config: KafkaConfig | str, topic: str) -> None:
        """
        Parameters
        ----------
        config : KafkaConfig | str
            Producer settings, or just a bootstrap servers string.
        topic : str
            Change feed topic.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)
        self.config = config
        self.topic = topic
        self.producer = Producer(config.to_dict())
        self.stats = FeedStats()

    def _on_delivery(self, err: Any, msg: Any) -> None:
        if err is not None:
            self.stats.failed += 1
            logger.error("Change feed delivery failed for key %s: %s", msg.key(), err)
            return
        self.stats.delivered += 1
        logger.debug("Event for %s stored at %s[%d]@%d", msg.key(), msg.topic(), msg.partition(), msg.offset())

    def publish(self, event: Event) -> None:
        """Queue one event; delivery is reported asynchronously.

        Raises
        ------
        SinkError
            The producer refused the message (full local queue, bad config).
        """
        payload = json.dumps(event_to_dict(event), ensure_ascii=False).encode("utf-8")
        try:
            self.producer.produce(
                topic=self.topic,
                key=event.subject.encode("utf-8"),
                value=payload,
                headers={"event_type": event.event_type},
                on_delivery=self._on_delivery,
            )
        except (BufferError, KafkaException) as e:
            raise SinkError(f"Failed to publish {event.event_type} for {event.subject}: {e}") from e

        self.stats.queued += 1
        self.stats.by_event_type[event.event_type] = self.stats.by_event_type.get(event.event_type, 0) + 1
        # Serve delivery callbacks from earlier produces
        self.producer.poll(0)

    def flush(self, timeout: float = 30.0) -> int:
        """Wait for outstanding deliveries and return how many are left."""
        return self.producer.flush(timeout)

    def close(self) -> None:
        remaining = self.flush()
        if remaining:
            logger.warning("Change feed closed with %d undelivered events", remaining)
        logger.info(
            "Change feed to %s closed: queued=%d delivered=%d failed=%d",
            self.topic,
            self.stats.queued,
            self.stats.delivered,
            self.stats.failed,
        )
