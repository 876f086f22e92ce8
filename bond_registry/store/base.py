"""Key/value store contract and the adapter wrapping it."""

import logging
from abc import ABC, abstractmethod
from typing import Iterator

from bond_registry.exceptions import BondRegistryError, StoreTransportError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Contract for the external ledger state.

    Only single-key ``get``/``put`` are required. Backends that can offer
    more override :meth:`put_if_absent` (create-only write) and
    :meth:`keys` (full key scan) and flag it through the class attributes.
    """

    supports_conditional_put = False
    supports_scan = False

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the value for ``key``, or None if it was never written."""

    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        """Insert or replace ``key``."""

    def put_if_absent(self, key: str, value: bytes) -> bool:
        """Write ``key`` only if it does not exist. Return False if it did."""
        raise NotImplementedError(f"{type(self).__name__} has no conditional put")

    def keys(self) -> Iterator[str]:
        """Yield every stored key."""
        raise NotImplementedError(f"{type(self).__name__} cannot scan keys")


class LedgerAdapter:
    """Pass-through to a :class:`KeyValueStore`.

    Absence comes back as ``None``. Every backend failure becomes a
    :class:`StoreTransportError` naming the operation and key, so callers
    never mistake a broken store for a missing record.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @property
    def supports_conditional_put(self) -> bool:
        return self.store.supports_conditional_put

    @property
    def supports_scan(self) -> bool:
        return self.store.supports_scan

    def get(self, key: str) -> bytes | None:
        try:
            return self.store.get(key)
        except BondRegistryError:
            raise
        except Exception as e:
            logger.error("GET %s failed: %s", key, e, extra={"key": key})
            raise StoreTransportError(f"get {key!r} failed: {e}") from e

    def put(self, key: str, value: bytes) -> None:
        try:
            self.store.put(key, value)
        except BondRegistryError:
            raise
        except Exception as e:
            logger.error("PUT %s failed: %s", key, e, extra={"key": key})
            raise StoreTransportError(f"put {key!r} failed: {e}") from e

    def put_if_absent(self, key: str, value: bytes) -> bool:
        if not self.supports_conditional_put:
            raise StoreTransportError(f"conditional put {key!r} not supported by {type(self.store).__name__}")
        try:
            return self.store.put_if_absent(key, value)
        except BondRegistryError:
            raise
        except Exception as e:
            logger.error("PUT_IF_ABSENT %s failed: %s", key, e, extra={"key": key})
            raise StoreTransportError(f"conditional put {key!r} failed: {e}") from e

    def keys(self) -> list[str]:
        """Return every stored key, sorted."""
        if not self.supports_scan:
            raise StoreTransportError(f"key scan not supported by {type(self.store).__name__}")
        try:
            return sorted(self.store.keys())
        except BondRegistryError:
            raise
        except Exception as e:
            logger.error("Key scan failed: %s", e)
            raise StoreTransportError(f"key scan failed: {e}") from e
