"""Tests for ConfigureCapabilitiesUseCase."""

from __future__ import annotations

import pytest

from template_ingest.l2_use_cases.configure_capabilities_use_case import ConfigureCapabilitiesUseCase
from tests.conftest import IMAGE, SHAPE, TEXT, FakeEngine


@pytest.fixture
def configured_engine() -> FakeEngine:
    engine = FakeEngine(with_scene=True)
    engine.add_page([IMAGE, TEXT, SHAPE])
    return engine


def _children(engine: FakeEngine, page_index: int = 0):
    return [engine.blocks[c] for c in engine.blocks[engine.pages[page_index]].children]


class TestConfigureCapabilities:
    @pytest.mark.asyncio
    async def test_image_block_is_replaceable(self, configured_engine):
        await ConfigureCapabilitiesUseCase(0.8).execute(configured_engine, configured_engine.pages)
        image = _children(configured_engine)[0]
        assert image.metadata == {'replaceableImage': 'true'}
        assert image.scopes == {'fill/change': True}

    @pytest.mark.asyncio
    async def test_text_block_is_content_editable_only(self, configured_engine):
        await ConfigureCapabilitiesUseCase(0.8).execute(configured_engine, configured_engine.pages)
        text = _children(configured_engine)[1]
        assert text.scopes == {
            'text/edit': True,
            'editor/select': True,
            'layer/move': False,
            'layer/resize': False,
            'layer/rotate': False,
        }
        assert text.metadata == {}

    @pytest.mark.asyncio
    async def test_other_block_is_left_as_imported(self, configured_engine):
        await ConfigureCapabilitiesUseCase(0.8).execute(configured_engine, configured_engine.pages)
        shape = _children(configured_engine)[2]
        assert shape.scopes == {}
        assert shape.metadata == {}

    @pytest.mark.asyncio
    async def test_pages_and_children_made_visible(self, configured_engine):
        await ConfigureCapabilitiesUseCase(0.8).execute(configured_engine, configured_engine.pages)
        assert configured_engine.blocks[configured_engine.pages[0]].visible
        assert all(child.visible for child in _children(configured_engine))

    @pytest.mark.asyncio
    async def test_frames_primary_page(self, configured_engine):
        configured_engine.add_page([TEXT])
        await ConfigureCapabilitiesUseCase(0.8).execute(configured_engine, configured_engine.pages)
        assert configured_engine.zoom_calls == [(configured_engine.pages[0], 0.8)]

    @pytest.mark.asyncio
    async def test_framing_failure_is_not_fatal(self, configured_engine):
        configured_engine.zoom_error = RuntimeError("block hasn't been layouted yet")
        outcomes = await ConfigureCapabilitiesUseCase(0.8).execute(configured_engine, configured_engine.pages)
        assert all(o.ok for o in outcomes)

    @pytest.mark.asyncio
    async def test_one_unreadable_block_among_fifty(self):
        engine = FakeEngine(with_scene=True)
        engine.add_page([IMAGE, TEXT] * 25)
        children = engine.blocks[engine.pages[0]].children
        broken = children[17]
        engine.unreadable.add(broken)

        outcomes = await ConfigureCapabilitiesUseCase(0.8).execute(engine, engine.pages)

        assert len(outcomes) == 50
        failed = [o for o in outcomes if not o.ok]
        assert [o.item for o in failed] == [broken]
        assert 'cannot read type' in failed[0].detail
        for handle in children:
            if handle == broken:
                continue
            assert engine.blocks[handle].scopes, f'block {handle} was not configured'

    @pytest.mark.asyncio
    async def test_invalid_page_is_reported_and_skipped(self):
        engine = FakeEngine(with_scene=True)
        bad = engine.add_page([IMAGE])
        good = engine.add_page([IMAGE])
        engine.invalid.add(bad)
        outcomes = await ConfigureCapabilitiesUseCase(0.8).execute(engine, engine.pages)
        assert outcomes[0].item == bad
        assert not outcomes[0].ok
        good_child = engine.blocks[engine.blocks[good].children[0]]
        assert good_child.metadata == {'replaceableImage': 'true'}

    @pytest.mark.asyncio
    async def test_broken_page_does_not_stop_later_pages(self):
        engine = FakeEngine(with_scene=True)
        broken = engine.add_page([IMAGE])
        healthy = engine.add_page([IMAGE, TEXT])
        engine.broken_pages.add(broken)

        outcomes = await ConfigureCapabilitiesUseCase(0.8).execute(engine, engine.pages)

        failed = [o for o in outcomes if not o.ok]
        assert [o.item for o in failed] == [broken]
        assert 'cannot list children' in failed[0].detail
        assert len(outcomes) == 3
        image = engine.blocks[engine.blocks[healthy].children[0]]
        assert image.metadata == {'replaceableImage': 'true'}

    @pytest.mark.asyncio
    async def test_frames_requested_primary_page(self):
        engine = FakeEngine(with_scene=True)
        engine.add_page([IMAGE])
        engine.add_page([TEXT])
        await ConfigureCapabilitiesUseCase(0.8).execute(engine, engine.pages, primary_index=1)
        assert engine.zoom_calls == [(engine.pages[1], 0.8)]

    @pytest.mark.asyncio
    async def test_out_of_range_primary_page_skips_framing(self, configured_engine):
        outcomes = await ConfigureCapabilitiesUseCase(0.8).execute(
            configured_engine, configured_engine.pages, primary_index=4
        )
        assert configured_engine.zoom_calls == []
        assert all(o.ok for o in outcomes)
