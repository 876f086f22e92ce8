"""Configuration management for bond-registry."""

import os
from dataclasses import dataclass, field
from typing import Any

from bond_registry.exceptions import ConfigurationError

STORE_BACKENDS = ("memory", "postgres")
EVENT_BACKENDS = ("none", "console", "kafka")


@dataclass
class StoreConfig:
    """Key/value store selection."""

    backend: str = "memory"
    index_key: str = "bondIDs"

    def __post_init__(self) -> None:
        if self.backend not in STORE_BACKENDS:
            raise ConfigurationError(
                f"Unknown store backend {self.backend!r} (expected one of {', '.join(STORE_BACKENDS)})"
            )
        if not self.index_key:
            raise ConfigurationError("Index key must not be empty")


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration for the ledger table."""

    host: str = "localhost"
    port: int = 5432
    database: str = "registry"
    user: str = "postgres"
    password: str = "postgres"
    table: str = "ledger_state"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class KafkaConfig:
    """Kafka producer configuration for the change feed."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 5
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "retries": self.retries,
        }


@dataclass
class EventsConfig:
    """Change feed configuration."""

    backend: str = "none"
    topic: str = "registry.bonds"
    source: str = "bond-registry"

    def __post_init__(self) -> None:
        if self.backend not in EVENT_BACKENDS:
            raise ConfigurationError(
                f"Unknown events backend {self.backend!r} (expected one of {', '.join(EVENT_BACKENDS)})"
            )


@dataclass
class RegistryConfig:
    """Main configuration for bond-registry."""

    store: StoreConfig = field(default_factory=StoreConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    events: EventsConfig = field(default_factory=EventsConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Create config from environment variables."""
        store = StoreConfig(
            backend=os.getenv("STORE_BACKEND", "memory"),
            index_key=os.getenv("INDEX_KEY", "bondIDs"),
        )

        try:
            port = int(os.getenv("POSTGRES_PORT", "5432"))
        except ValueError as e:
            raise ConfigurationError(f"POSTGRES_PORT must be an integer: {e}") from e

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=port,
            database=os.getenv("POSTGRES_DB", "registry"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            table=os.getenv("POSTGRES_TABLE", "ledger_state"),
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        events = EventsConfig(
            backend=os.getenv("EVENTS_BACKEND", "none"),
            topic=os.getenv("EVENTS_TOPIC", "registry.bonds"),
        )

        return cls(
            store=store,
            postgres=postgres,
            kafka=kafka,
            events=events,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
