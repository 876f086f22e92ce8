"""In-memory key/value store for tests and local runs."""

import threading
from typing import Iterator

from bond_registry.store.base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dict-backed store. A lock makes :meth:`put_if_absent` atomic."""

    supports_conditional_put = True
    supports_scan = True

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: bytes) -> None:
        with self._lock:
            self._data[key] = bytes(value)

    def put_if_absent(self, key: str, value: bytes) -> bool:
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = bytes(value)
            return True

    def keys(self) -> Iterator[str]:
        with self._lock:
            snapshot = list(self._data)
        return iter(snapshot)

    def __len__(self) -> int:
        return len(self._data)
