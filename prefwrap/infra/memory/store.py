"""In-memory implementation of StorePort.

Process-lifetime dict, one lock per operation. Backs the ``memory`` backend
and the test suite.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from prefwrap.infra.codec import ensure_storable
from prefwrap.ports.store_port import StorePort

if TYPE_CHECKING:
    from prefwrap.shared.types import StoredValue


class InMemoryStore(StorePort):
    """Dict-backed store. Values vanish with the process."""

    def __init__(self, initial: dict[str, StoredValue] | None = None) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, StoredValue] = {}
        for key, value in (initial or {}).items():
            self.write(key, value)

    def read(self, key: str) -> StoredValue | None:
        with self._lock:
            return self._data.get(key)

    def write(self, key: str, value: StoredValue) -> None:
        ensure_storable(value)
        if isinstance(value, bytearray):
            value = bytes(value)
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
