"""Key/value store backends and the adapter the repository talks to."""

from bond_registry.store.base import KeyValueStore, LedgerAdapter
from bond_registry.store.memory import InMemoryStore
from bond_registry.store.postgres import PostgresStore

__all__ = ["InMemoryStore", "KeyValueStore", "LedgerAdapter", "PostgresStore"]
