"""Use case: clear or (re)create the target scene before an import."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from template_ingest.l1_entities.errors import SceneError
from template_ingest.l1_entities.load_result import ItemOutcome
from template_ingest.l2_use_cases.ports.composition_engine import BlockHandle, CompositionEngine

log = logging.getLogger('tingest.scene')


@dataclass(frozen=True)
class SceneReport:
    """The usable scene plus one outcome per page that was torn down."""

    scene: BlockHandle
    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if not o.ok]


class PrepareSceneUseCase:
    """Leaves the engine with an empty, valid scene so no previous pages leak into a reload."""

    def execute(self, engine: CompositionEngine) -> SceneReport:
        """Prepare the scene. Raises SceneError after the single fallback fails."""
        try:
            return self._prepare(engine)
        except Exception as e:
            log.warning('Could not clear existing scene, creating a fresh one: %s', e)
            return SceneReport(scene=self._fallback_create(engine))

    def _prepare(self, engine: CompositionEngine) -> SceneReport:
        scene = engine.scene.get()
        if scene is None:
            log.info('No scene exists, creating one')
            scene = engine.scene.create()
            if scene is None or not engine.block.is_valid(scene):
                raise SceneError('Failed to create valid scene')
            return SceneReport(scene=scene)

        if not engine.block.is_valid(scene):
            log.warning('Scene %s is no longer valid, creating a new one', scene)
            return SceneReport(scene=engine.scene.create())

        pages = engine.scene.get_pages()
        log.debug('Clearing %d existing page(s)', len(pages))
        return SceneReport(scene=scene, outcomes=[_destroy_page(engine, page) for page in pages])

    @staticmethod
    def _fallback_create(engine: CompositionEngine) -> BlockHandle:
        try:
            scene = engine.scene.create()
        except Exception as e:
            raise SceneError(f'Engine appears to be disposed: {e}') from e
        if scene is None:
            raise SceneError('Engine appears to be disposed: scene creation returned nothing')
        return scene


def _destroy_page(engine: CompositionEngine, page: BlockHandle) -> ItemOutcome:
    try:
        if not engine.block.is_valid(page):
            return ItemOutcome(item=page, detail='already invalid')
        engine.block.destroy(page)
        return ItemOutcome(item=page)
    except Exception as e:
        log.warning('Failed to destroy page %s: %s', page, e)
        return ItemOutcome(item=page, ok=False, detail=f'{type(e).__name__}: {e}')
