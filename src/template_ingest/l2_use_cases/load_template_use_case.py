"""Use case: the full template ingestion pipeline.

fetch (or cache hit) -> validate -> prepare scene -> parse -> configure -> show side.
Every failure is converted into a LoadResult; callers never need to catch.
"""

from __future__ import annotations

import logging

from template_ingest.l1_entities.cache_entry import CacheEntry
from template_ingest.l1_entities.config import IngestConfig
from template_ingest.l1_entities.errors import TemplateIngestError
from template_ingest.l1_entities.load_result import LoadResult
from template_ingest.l1_entities.progress import FETCH_SHARE, ProgressCallback, ProgressStage, emit
from template_ingest.l1_entities.template import DEFAULT_FRONT_PAGE_INDEX, Side, TemplateDescriptor
from template_ingest.l2_use_cases.configure_capabilities_use_case import ConfigureCapabilitiesUseCase
from template_ingest.l2_use_cases.engine_guard import assert_alive
from template_ingest.l2_use_cases.parse_template_use_case import ParseTemplateUseCase
from template_ingest.l2_use_cases.ports.buffer_cache import BufferCache
from template_ingest.l2_use_cases.ports.buffer_fetcher import BufferFetcher
from template_ingest.l2_use_cases.ports.composition_engine import CompositionEngine
from template_ingest.l2_use_cases.ports.template_importer import TemplateImporter
from template_ingest.l2_use_cases.prepare_scene_use_case import PrepareSceneUseCase
from template_ingest.l2_use_cases.show_side_use_case import ShowSideUseCase, resolve_side
from template_ingest.l2_use_cases.utils.buffer_checks import friendly_error, size_mb

log = logging.getLogger('tingest.pipeline')


class LoadTemplateUseCase:
    """Runs one template load against one engine instance.

    The caller serializes loads per engine; nothing here takes a lock.
    """

    def __init__(
        self,
        fetcher: BufferFetcher,
        importer: TemplateImporter,
        cache: BufferCache,
        config: IngestConfig,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._config = config
        self._prepare_uc = PrepareSceneUseCase()
        self._parse_uc = ParseTemplateUseCase(importer, config.parse)
        self._configure_uc = ConfigureCapabilitiesUseCase(config.viewport.zoom_margin)
        self._show_uc = ShowSideUseCase(config.viewport.zoom_margin)

    async def execute(
        self,
        engine: CompositionEngine,
        reference: str,
        on_progress: ProgressCallback | None = None,
        template: TemplateDescriptor | None = None,
        side: Side | str = Side.FRONT,
    ) -> LoadResult:
        """Load *reference* into *engine*, using the buffer cache when possible."""
        try:
            assert_alive(engine, 'entry')
            cached = self._cache.get(reference)
            if cached is not None:
                return await self._apply_cached(engine, reference, cached, on_progress, template, side)

            emit(on_progress, ProgressStage.FETCHING, 'Loading file...', 0)
            data = await self._fetcher.fetch(reference, on_progress)
            self._warn_if_large(data, on_progress)
            result = await self._ingest(engine, data, on_progress, template, side)
        except Exception as e:
            return _failure(e, reference)

        if len(data) < self._config.cache.max_entry_bytes:
            self._cache.put(reference, CacheEntry(buffer=data, template=template, result=result))
        else:
            log.info('Not caching %s: %.1f MB exceeds cache ceiling', reference, size_mb(data))
        return result

    async def execute_local(
        self,
        engine: CompositionEngine,
        data: bytes,
        on_progress: ProgressCallback | None = None,
        template: TemplateDescriptor | None = None,
    ) -> LoadResult:
        """Load bytes the caller already holds. Bypasses the fetcher and the cache."""
        try:
            assert_alive(engine, 'entry')
            emit(on_progress, ProgressStage.FETCHING, 'Reading file...', 0)
            self._warn_if_large(data, on_progress)
            return await self._ingest(engine, data, on_progress, template, Side.FRONT)
        except Exception as e:
            return _failure(e, '<local file>')

    async def _apply_cached(
        self,
        engine: CompositionEngine,
        reference: str,
        entry: CacheEntry,
        on_progress: ProgressCallback | None,
        template: TemplateDescriptor | None,
        side: Side | str,
    ) -> LoadResult:
        log.info('Cache hit for %s (%d bytes)', reference, entry.size)
        emit(on_progress, ProgressStage.CACHED, 'Loading from cache...', FETCH_SHARE)
        try:
            result = await self._ingest(engine, entry.buffer, on_progress, template or entry.template, side)
        except Exception:
            log.warning('Cached buffer for %s failed to apply; evicting', reference)
            self._cache.evict(reference)
            raise
        entry.result = result
        return result

    async def _ingest(
        self,
        engine: CompositionEngine,
        data: bytes,
        on_progress: ProgressCallback | None,
        template: TemplateDescriptor | None,
        side: Side | str,
    ) -> LoadResult:
        self._parse_uc.validate(data)
        emit(on_progress, ProgressStage.PROCESSING, 'Processing layers...', 60)

        scene_report = self._prepare_uc.execute(engine)
        parse_report = await self._parse_uc.execute(engine, data, on_progress)
        log.info(
            'Imported %d page(s) for template %r',
            len(parse_report.pages),
            template.name if template else 'Unknown',
        )
        block_outcomes = await self._configure_uc.execute(
            engine, parse_report.pages, _initial_page_index(template, Side.FRONT)
        )
        page_index = await self._show_uc.show_page(engine, _initial_page_index(template, side))

        emit(on_progress, ProgressStage.COMPLETE, 'Template loaded successfully!', 100)
        return LoadResult(
            success=True,
            page_count=len(parse_report.pages),
            is_double_sided=bool(template and template.is_double_sided),
            page_index=page_index,
            messages=parse_report.messages,
            diagnostics=scene_report.failures + [o for o in block_outcomes if not o.ok],
        )

    def _warn_if_large(self, data: bytes, on_progress: ProgressCallback | None) -> None:
        if len(data) > self._config.fetch.large_file_warning_bytes:
            emit(
                on_progress,
                ProgressStage.WARNING,
                f'Large file detected ({size_mb(data):.1f}MB). This may take a moment...',
                FETCH_SHARE,
            )


def _initial_page_index(template: TemplateDescriptor | None, side: Side | str) -> int:
    if template is None:
        return DEFAULT_FRONT_PAGE_INDEX
    if template.is_double_sided:
        return template.page_index_for(resolve_side(side))
    return template.page_index_for(Side.FRONT)


def _failure(error: Exception, subject: str) -> LoadResult:
    step = error.step if isinstance(error, TemplateIngestError) else 'pipeline'
    message = str(error) or type(error).__name__
    log.error('Loading %s failed at %s step: %s', subject, step, message, exc_info=True)
    return LoadResult.failure(friendly_error(message), step)
