"""Port: bounded buffer cache keyed by template reference."""

from __future__ import annotations

from typing import Protocol

from template_ingest.l1_entities.cache_entry import CacheEntry


class BufferCache(Protocol):  # pragma: no cover -- abstract Protocol; never instantiated directly
    """Abstract cache of fetched template buffers."""

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for *key* without changing eviction order."""
        ...

    def put(self, key: str, entry: CacheEntry) -> None:
        """Insert *entry*, evicting the oldest insertion when full."""
        ...

    def evict(self, key: str) -> None:
        """Drop *key* if present."""
        ...

    def __contains__(self, key: object) -> bool: ...

    def __len__(self) -> int: ...
