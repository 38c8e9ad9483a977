"""TemplateController — the caller-facing surface of the ingestion pipeline."""

from __future__ import annotations

import logging

from template_ingest.l1_entities.config import IngestConfig
from template_ingest.l1_entities.load_result import LoadResult, SideSwitchResult
from template_ingest.l1_entities.progress import ProgressCallback
from template_ingest.l1_entities.template import Side, TemplateDescriptor
from template_ingest.l2_use_cases.load_template_use_case import LoadTemplateUseCase
from template_ingest.l2_use_cases.ports.buffer_cache import BufferCache
from template_ingest.l2_use_cases.ports.buffer_fetcher import BufferFetcher
from template_ingest.l2_use_cases.ports.composition_engine import CompositionEngine
from template_ingest.l2_use_cases.ports.template_importer import TemplateImporter
from template_ingest.l2_use_cases.show_side_use_case import ShowSideUseCase

log = logging.getLogger('tingest.controller')


class TemplateController:
    """Bridges wizard/editor callers to the use cases.

    Owns the buffer cache handed to it by the composition root. One controller
    may serve several engines; loads against the same engine must not overlap.
    """

    def __init__(
        self,
        config: IngestConfig,
        fetcher: BufferFetcher,
        importer: TemplateImporter,
        cache: BufferCache,
    ) -> None:
        self.cache = cache
        self._load_uc = LoadTemplateUseCase(fetcher, importer, cache, config)
        self._show_uc = ShowSideUseCase(config.viewport.zoom_margin)

    async def load_template(
        self,
        engine: CompositionEngine,
        reference: str,
        on_progress: ProgressCallback | None = None,
        template: TemplateDescriptor | None = None,
        side: Side | str = Side.FRONT,
    ) -> LoadResult:
        """Fetch (or reuse) and import a template. Never raises."""
        result = await self._load_uc.execute(engine, reference, on_progress, template, side)
        log.info('load_template %s -> success=%s pages=%d', reference, result.success, result.page_count)
        return result

    async def load_from_local_file(
        self,
        engine: CompositionEngine,
        file_bytes: bytes,
        on_progress: ProgressCallback | None = None,
        template: TemplateDescriptor | None = None,
    ) -> LoadResult:
        """Import bytes the caller already read. Never raises."""
        return await self._load_uc.execute_local(engine, file_bytes, on_progress, template)

    async def switch_side(
        self,
        engine: CompositionEngine,
        template: TemplateDescriptor | None,
        side: Side | str,
    ) -> SideSwitchResult:
        """Show the requested side of a double-sided template. Never raises."""
        return await self._show_uc.execute(engine, template, side)
