"""Use case: assign per-block editing permissions on every imported page."""

from __future__ import annotations

import logging

from template_ingest.l1_entities.block_kind import REPLACEABLE_IMAGE_KEY, BlockKind, CapabilityScope
from template_ingest.l1_entities.load_result import ItemOutcome
from template_ingest.l2_use_cases.ports.composition_engine import BlockHandle, CompositionEngine

log = logging.getLogger('tingest.configure')

TEXT_LOCKED_SCOPES = (CapabilityScope.MOVE, CapabilityScope.RESIZE, CapabilityScope.ROTATE)


class ConfigureCapabilitiesUseCase:
    """Walks pages and their direct children, tagging images and unlocking text content.

    Best-effort per page and per block: a failing item yields a failed outcome
    and the walk continues with the next one.
    """

    def __init__(self, zoom_margin: float) -> None:
        self._zoom_margin = zoom_margin

    async def execute(
        self,
        engine: CompositionEngine,
        pages: list[BlockHandle],
        primary_index: int = 0,
    ) -> list[ItemOutcome]:
        """Configure every page, then frame the page at *primary_index*."""
        outcomes: list[ItemOutcome] = []
        for index, page in enumerate(pages):
            try:
                if not engine.block.is_valid(page):
                    log.warning('Page %d is not valid, skipping', index)
                    outcomes.append(ItemOutcome(item=page, ok=False, detail='invalid page'))
                    continue
                engine.block.set_visible(page, True)
                children = engine.block.get_children(page)
            except Exception as e:
                log.warning('Error configuring page %d: %s', index, e)
                outcomes.append(ItemOutcome(item=page, ok=False, detail=f'{type(e).__name__}: {e}'))
                continue
            log.debug('Page %d has %d children', index, len(children))
            outcomes.extend(_configure_block(engine, child, index) for child in children)

        failed = sum(1 for o in outcomes if not o.ok)
        log.info('Configured %d item(s), %d failure(s)', len(outcomes) - failed, failed)

        if 0 <= primary_index < len(pages):
            await self._frame_primary(engine, pages[primary_index])
        else:
            log.warning('Primary page %d out of range (%d pages), not framing', primary_index, len(pages))
        return outcomes

    async def _frame_primary(self, engine: CompositionEngine, page: BlockHandle) -> None:
        try:
            log.debug(
                'Primary page dimensions: %s x %s',
                engine.block.get_width(page),
                engine.block.get_height(page),
            )
            await engine.scene.zoom_to_block(page, self._zoom_margin)
        except Exception as e:
            log.warning('Failed to frame primary page: %s', e)


def _configure_block(engine: CompositionEngine, block: BlockHandle, page_index: int) -> ItemOutcome:
    try:
        if not engine.block.is_valid(block):
            return ItemOutcome(item=block, ok=False, detail='invalid block')
        engine.block.set_visible(block, True)
        kind = BlockKind.from_type_name(engine.block.get_type(block))
        if kind is BlockKind.IMAGE:
            engine.block.set_metadata(block, REPLACEABLE_IMAGE_KEY, 'true')
            engine.block.set_scope_enabled(block, CapabilityScope.FILL_CHANGE.value, True)
            log.debug('Enabled image replacement on page %d: %s %r', page_index, block, engine.block.get_name(block))
        elif kind is BlockKind.TEXT:
            engine.block.set_scope_enabled(block, CapabilityScope.TEXT_EDIT.value, True)
            engine.block.set_scope_enabled(block, CapabilityScope.SELECT.value, True)
            for scope in TEXT_LOCKED_SCOPES:
                engine.block.set_scope_enabled(block, scope.value, False)
            log.debug(
                'Enabled text editing on page %d: %s %r %r',
                page_index,
                block,
                engine.block.get_name(block),
                engine.block.get_string(block, 'text/text'),
            )
        elif kind is BlockKind.OTHER:
            pass
        else:  # pragma: no cover -- unreachable while BlockKind is closed
            raise ValueError(f'Unhandled block kind: {kind}')
        return ItemOutcome(item=block, detail=kind.value)
    except Exception as e:
        log.warning('Error configuring block %s on page %d: %s', block, page_index, e)
        return ItemOutcome(item=block, ok=False, detail=f'{type(e).__name__}: {e}')
