"""Use case: run the external import under a timeout and read back the pages."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from template_ingest.l1_entities.config import ParseConfig
from template_ingest.l1_entities.errors import EngineDisposedError, ParseError, ParseTimeoutError
from template_ingest.l1_entities.progress import ProgressCallback, ProgressStage, emit
from template_ingest.l2_use_cases.engine_guard import assert_alive
from template_ingest.l2_use_cases.ports.composition_engine import BlockHandle, CompositionEngine
from template_ingest.l2_use_cases.ports.template_importer import ImportReport, TemplateImporter
from template_ingest.l2_use_cases.utils.buffer_checks import size_mb, validate_buffer

log = logging.getLogger('tingest.parse')


@dataclass(frozen=True)
class ParseReport:
    pages: list[BlockHandle]
    messages: list[str] = field(default_factory=list)


class ParseTemplateUseCase:
    """Invokes the importer, racing it against the parse timeout."""

    def __init__(self, importer: TemplateImporter, config: ParseConfig) -> None:
        self._importer = importer
        self._config = config

    def validate(self, data: bytes) -> None:
        """Reject unusable buffers before the scene is touched. Raises CorruptBufferError."""
        log.info('Buffer received: %d bytes (%.2f MB)', len(data), size_mb(data))
        validate_buffer(data, self._config.min_buffer_bytes, self._config.signature)

    async def execute(
        self,
        engine: CompositionEngine,
        data: bytes,
        on_progress: ProgressCallback | None = None,
    ) -> ParseReport:
        """Import *data* into the current scene. Raises ParseError, ParseTimeoutError, EngineDisposedError."""
        emit(on_progress, ProgressStage.PARSING, 'Parsing layers...', 70)
        await self._importer.register_asset_library(engine)

        assert_alive(engine, 'before-parse')
        report = await self._run_import(engine, data, on_progress)
        assert_alive(engine, 'after-parse')

        try:
            pages = list(engine.scene.get_pages())
        except Exception as e:
            raise ParseError(f'Failed to get pages after parsing: {e}') from e
        log.info('Pages after import: %d', len(pages))
        if not pages:
            raise ParseError('Parsing failed: no pages produced by import')

        return ParseReport(pages=pages, messages=_messages_of(report))

    async def _run_import(
        self,
        engine: CompositionEngine,
        data: bytes,
        on_progress: ProgressCallback | None,
    ) -> ImportReport:
        emit(on_progress, ProgressStage.PARSING, 'Processing layers...', 80)
        timeout = self._config.timeout
        try:
            # wait_for cancels the import task when the timeout wins
            report = await asyncio.wait_for(self._importer.import_document(engine, data), timeout=timeout)
        except asyncio.TimeoutError as e:
            log.error('Import did not settle within %.1fs; cancelled', timeout)
            raise ParseTimeoutError(f'Parsing timeout after {timeout:g}s') from e
        except EngineDisposedError:
            raise
        except Exception as e:
            log.error('Import failed: %s', e, exc_info=True)
            raise ParseError(f'Parsing failed: {e or type(e).__name__}') from e
        if report is None:
            raise ParseError('Parsing failed: importer returned no report')
        return report


def _messages_of(report: ImportReport) -> list[str]:
    try:
        return [str(m) for m in report.get_messages()]
    except Exception as e:
        log.warning('Could not read import diagnostics: %s', e)
        return []
