"""Gateway: in-memory insertion-ordered buffer cache — implements BufferCache port."""

from __future__ import annotations

import logging

from template_ingest.l1_entities.cache_entry import CacheEntry

log = logging.getLogger('tingest.cache')

DEFAULT_CAPACITY = 2


class InMemoryBufferCache:
    """Bounded cache evicting the oldest insertion. Reads do not refresh recency."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f'capacity must be at least 1, got {capacity}')
        self._capacity = capacity
        self._entries: dict[str, CacheEntry] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry) -> None:
        self._entries.pop(key, None)
        while len(self._entries) >= self._capacity:
            oldest = next(iter(self._entries))
            log.debug('Evicting oldest cache entry %s', oldest)
            del self._entries[oldest]
        self._entries[key] = entry
        log.debug('Cached %s (%d bytes), %d/%d entries', key, entry.size, len(self._entries), self._capacity)

    def evict(self, key: str) -> None:
        if self._entries.pop(key, None) is not None:
            log.debug('Evicted cache entry %s', key)

    def keys(self) -> list[str]:
        """Keys in insertion order, oldest first."""
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
