"""Process-wide store of decompressed chunk payloads."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from chunk_inspector.settings import MAX_CACHE_ENTRY_BYTES

logger = logging.getLogger(__name__)


class ChunkCache:
    """Thread-safe map of chunk path -> decompressed bytes.

    Entries larger than ``max_entry_bytes`` are never stored. With
    ``capacity_bytes=None`` nothing is evicted for the lifetime of the cache;
    otherwise the least recently used entries are dropped until the total
    size fits. The lock only guards map bookkeeping, never decompression.
    """

    def __init__(self, max_entry_bytes: int = MAX_CACHE_ENTRY_BYTES, capacity_bytes: int | None = None) -> None:
        self.max_entry_bytes = max_entry_bytes
        self.capacity_bytes = capacity_bytes
        self._entries: OrderedDict[str, bytes] = OrderedDict()
        self._total = 0
        self._lock = threading.Lock()

    def fetch(self, key: str) -> bytes | None:
        with self._lock:
            data = self._entries.get(key)
            if data is not None and self.capacity_bytes is not None:
                self._entries.move_to_end(key)
        logger.debug("Chunk cache %s for %s", "hit" if data is not None else "miss", key)
        return data

    def store(self, key: str, data: bytes) -> None:
        size = len(data)
        if size > self.max_entry_bytes:
            logger.debug("Not caching %s: %d bytes exceeds %d", key, size, self.max_entry_bytes)
            return
        if self.capacity_bytes is not None and size > self.capacity_bytes:
            logger.debug("Not caching %s: %d bytes exceeds capacity %d", key, size, self.capacity_bytes)
            return
        data = bytes(data)
        with self._lock:
            previous = self._entries.pop(key, None)
            if previous is not None:
                self._total -= len(previous)
            self._entries[key] = data
            self._total += size
            if self.capacity_bytes is not None:
                while self._total > self.capacity_bytes:
                    evicted_key, evicted = self._entries.popitem(last=False)
                    self._total -= len(evicted)
                    logger.debug("Evicted %s (%d bytes) from chunk cache", evicted_key, len(evicted))

    @property
    def total_bytes(self) -> int:
        with self._lock:
            return self._total

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
