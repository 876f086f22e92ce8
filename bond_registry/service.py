"""Wiring of store, change feed, repository and router from configuration."""

import logging
from dataclasses import dataclass
from typing import Any

from bond_registry.config import RegistryConfig
from bond_registry.credentials import CredentialDirectory
from bond_registry.exceptions import ConfigurationError
from bond_registry.repository import BondRepository
from bond_registry.router import Router
from bond_registry.sinks import ConsoleSink, KafkaSink
from bond_registry.store import InMemoryStore, KeyValueStore, LedgerAdapter, PostgresStore

logger = logging.getLogger(__name__)


@dataclass
class Registry:
    """Assembled components sharing one store."""

    store: KeyValueStore
    repository: BondRepository
    directory: CredentialDirectory
    router: Router
    sink: Any | None = None

    def close(self) -> None:
        """Flush the change feed and release the store connection."""
        if self.sink is not None:
            self.sink.close()
        if isinstance(self.store, PostgresStore):
            self.store.close()


def create_store(config: RegistryConfig) -> KeyValueStore:
    """Open the configured key/value backend."""
    if config.store.backend == "memory":
        return InMemoryStore()
    if config.store.backend == "postgres":
        return PostgresStore(config.postgres)
    raise ConfigurationError(f"Unknown store backend {config.store.backend!r}")


def create_sink(config: RegistryConfig) -> Any | None:
    """Build the configured change feed sink, or None when disabled."""
    if config.events.backend == "none":
        return None
    if config.events.backend == "console":
        return ConsoleSink()
    if config.events.backend == "kafka":
        return KafkaSink(config.kafka, topic=config.events.topic)
    raise ConfigurationError(f"Unknown events backend {config.events.backend!r}")


def create_registry(config: RegistryConfig, store: KeyValueStore | None = None) -> Registry:
    """Assemble a registry, opening a store unless one is passed in."""
    store = store if store is not None else create_store(config)
    ledger = LedgerAdapter(store)
    sink = create_sink(config)
    repository = BondRepository(
        ledger,
        index_key=config.store.index_key,
        sink=sink,
        source=config.events.source,
    )
    directory = CredentialDirectory(ledger, index_key=config.store.index_key)
    logger.info(
        "Registry ready: store=%s, events=%s, index_key=%s",
        type(store).__name__,
        config.events.backend,
        config.store.index_key,
    )
    return Registry(
        store=store,
        repository=repository,
        directory=directory,
        router=Router(repository, directory),
        sink=sink,
    )


def create_router(config: RegistryConfig, store: KeyValueStore | None = None) -> Router:
    """Shortcut for :func:`create_registry` when only the router is needed."""
    return create_registry(config, store).router
