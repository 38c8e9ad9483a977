"""Liveness checks run around every pipeline phase that touches the engine."""

from __future__ import annotations

import logging

from template_ingest.l1_entities.errors import EngineDisposedError
from template_ingest.l2_use_cases.ports.composition_engine import CompositionEngine

log = logging.getLogger('tingest.engine')


def assert_alive(engine: CompositionEngine | None, checkpoint: str = 'entry') -> None:
    """Raise EngineDisposedError unless *engine* still answers a cheap read.

    The engine may be torn down by its owner while a fetch or parse is
    suspended, so callers re-check after every long await.
    """
    try:
        scene_api = getattr(engine, 'scene', None)
        block_api = getattr(engine, 'block', None)
    except Exception as e:
        log.error('Engine accessor lookup failed at %s checkpoint: %s', checkpoint, e)
        raise EngineDisposedError(f'Engine has been disposed or is no longer valid ({checkpoint})') from e

    if scene_api is None or block_api is None:
        log.error('Engine accessors missing at %s checkpoint', checkpoint)
        raise EngineDisposedError(f'Engine is not initialized or has been disposed ({checkpoint})')

    try:
        scene = scene_api.get()
        # with no scene yet, probe with handle 0 (never live) so a dead block accessor still surfaces here
        block_api.is_valid(scene if scene is not None else 0)
    except Exception as e:
        log.error('Engine probe failed at %s checkpoint: %s', checkpoint, e, exc_info=True)
        raise EngineDisposedError(f'Engine has been disposed or is no longer valid ({checkpoint})') from e
