"""Buffer cache entry entity."""

from __future__ import annotations

from dataclasses import dataclass

from template_ingest.l1_entities.load_result import LoadResult
from template_ingest.l1_entities.template import TemplateDescriptor


@dataclass
class CacheEntry:
    """Raw bytes of a previously fetched template plus what produced them."""

    buffer: bytes
    template: TemplateDescriptor | None = None
    result: LoadResult | None = None

    @property
    def size(self) -> int:
        return len(self.buffer)
