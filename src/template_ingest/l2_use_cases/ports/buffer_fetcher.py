"""Port: raw template buffer retrieval."""

from __future__ import annotations

from typing import Protocol

from template_ingest.l1_entities.progress import ProgressCallback


class BufferFetcher(Protocol):
    """Abstract fetcher for URL or inline-data references."""

    async def fetch(self, reference: str, on_progress: ProgressCallback | None = None) -> bytes:
        """Return the raw bytes behind *reference*. Raises FetchError on failure."""
        ...
