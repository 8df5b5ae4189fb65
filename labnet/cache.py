"""A thread-safe least-recently-used cache of response bodies."""

from __future__ import annotations

import threading
from collections import OrderedDict

_Key = tuple[str, int, str]


class LRUCache:
    """Caches byte payloads by (host, port, path) within a byte budget.

    When a new entry would exceed the capacity, the least recently used
    entries are dropped until it fits. A successful lookup makes an
    entry the most recently used.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self.size = 0
        self._entries: OrderedDict[_Key, bytes] = OrderedDict()
        self._lock = threading.Lock()

    def put(self, host: str, port: int, path: str, data: bytes) -> None:
        """Store ``data`` under the key, evicting old entries as needed."""
        payload = bytes(data)
        if len(payload) > self.capacity:
            raise ValueError(
                f"object of {len(payload)} bytes exceeds cache capacity {self.capacity}"
            )
        key = (host, port, path)
        with self._lock:
            old = self._entries.pop(key, None)
            if old is not None:
                self.size -= len(old)
            while self.size + len(payload) > self.capacity:
                _, evicted = self._entries.popitem(last=False)
                self.size -= len(evicted)
            self._entries[key] = payload
            self.size += len(payload)

    def get(self, host: str, port: int, path: str) -> bytes | None:
        """Return the cached bytes for the key, or None when absent."""
        key = (host, port, path)
        with self._lock:
            payload = self._entries.get(key)
            if payload is None:
                return None
            self._entries.move_to_end(key)
            return payload

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)