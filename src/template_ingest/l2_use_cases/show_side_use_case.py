"""Use case: show exactly one page of a template and frame it."""

from __future__ import annotations

import logging

from template_ingest.l1_entities.errors import PageNotFoundError
from template_ingest.l1_entities.load_result import SideSwitchResult
from template_ingest.l1_entities.template import Side, TemplateDescriptor
from template_ingest.l2_use_cases.ports.composition_engine import BlockHandle, CompositionEngine

log = logging.getLogger('tingest.visibility')


def resolve_side(side: Side | str) -> Side:
    """Parse a side name. Raises ValueError for anything but front/back."""
    if isinstance(side, Side):
        return side
    try:
        return Side(side)
    except ValueError:
        raise ValueError(f'Invalid side: {side!r}') from None


class ShowSideUseCase:
    """Page visibility controller for single- and double-sided templates."""

    def __init__(self, zoom_margin: float) -> None:
        self._zoom_margin = zoom_margin

    async def execute(
        self,
        engine: CompositionEngine,
        template: TemplateDescriptor | None,
        side: Side | str = Side.FRONT,
    ) -> SideSwitchResult:
        """Switch the visible page. Never raises."""
        try:
            target = resolve_side(side)
            if template is None or not template.is_double_sided:
                log.info('Single-sided template, no switching possible')
                return SideSwitchResult(success=True)
            index = await self.show_page(engine, template.page_index_for(target))
        except Exception as e:
            log.error('Error switching sides: %s', e)
            return SideSwitchResult(success=False, error=str(e))
        log.info('Switched to %s side (page %d)', target.value, index)
        return SideSwitchResult(success=True, page_index=index)

    async def show_page(self, engine: CompositionEngine, index: int) -> int:
        """Make page *index* the only visible page. Raises PageNotFoundError."""
        pages = engine.scene.get_pages()
        if not 0 <= index < len(pages):
            raise PageNotFoundError(f'Page {index} not found. Available pages: {len(pages)}')
        for i, page in enumerate(pages):
            try:
                if engine.block.is_valid(page):
                    engine.block.set_visible(page, i == index)
            except Exception as e:
                log.warning('Could not set visibility of page %d: %s', i, e)
        await self._frame(engine, pages[index])
        return index

    async def _frame(self, engine: CompositionEngine, page: BlockHandle) -> None:
        try:
            if engine.block.is_valid(page):
                await engine.scene.zoom_to_block(page, self._zoom_margin)
        except Exception as e:
            log.warning('Failed to frame page %s: %s', page, e)
