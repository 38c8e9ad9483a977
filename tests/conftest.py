"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field

import pytest

from template_ingest.l1_entities.config import IngestConfig
from template_ingest.l1_entities.progress import FETCH_SHARE, ProgressEvent, ProgressStage
from template_ingest.l3_interface_adapters.gateways.memory_buffer_cache import InMemoryBufferCache
from template_ingest.l4_frameworks_and_drivers.infra_config import build_ingest_config

IMAGE = '//ly.img.ubq/graphic'
TEXT = '//ly.img.ubq/text'
SHAPE = '//ly.img.ubq/shape'


def make_psd(size: int = 4096, signature: bytes = b'8BPS') -> bytes:
    """A buffer that passes size and signature checks. Content is opaque to the pipeline."""
    return signature + b'\x00' * (size - len(signature))


# --- Protocol-conforming Fakes ---


@dataclass
class FakeBlock:
    type: str
    name: str = ''
    text: str = ''
    visible: bool = False
    children: list[int] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    scopes: dict[str, bool] = field(default_factory=dict)
    width: float = 1800.0
    height: float = 1200.0


class FakeSceneApi:
    def __init__(self, engine: FakeEngine) -> None:
        self._engine = engine

    def get(self) -> int | None:
        if self._engine.scene_get_error is not None:
            raise self._engine.scene_get_error
        return self._engine.scene_id

    def create(self) -> int | None:
        self._engine.create_calls += 1
        if self._engine.create_error is not None:
            raise self._engine.create_error
        if self._engine.create_returns_none:
            return None
        self._engine.scene_id = self._engine.new_block('//ly.img.ubq/scene')
        self._engine.pages = []
        return self._engine.scene_id

    def get_pages(self) -> list[int]:
        if self._engine.get_pages_error is not None:
            raise self._engine.get_pages_error
        return list(self._engine.pages)

    async def zoom_to_block(self, block: int, margin: float) -> None:
        self._engine.zoom_calls.append((block, margin))
        if self._engine.zoom_error is not None:
            raise self._engine.zoom_error


class FakeBlockApi:
    def __init__(self, engine: FakeEngine) -> None:
        self._engine = engine

    def _get(self, block: int) -> FakeBlock:
        return self._engine.blocks[block]

    def is_valid(self, block: int) -> bool:
        if self._engine.is_valid_error is not None:
            raise self._engine.is_valid_error
        return block in self._engine.blocks and block not in self._engine.invalid

    def get_children(self, block: int) -> list[int]:
        if block in self._engine.broken_pages:
            raise RuntimeError(f'cannot list children of block {block}')
        return list(self._get(block).children)

    def set_visible(self, block: int, visible: bool) -> None:
        if block in self._engine.stuck:
            raise RuntimeError(f'block {block} ignores visibility changes')
        self._get(block).visible = visible

    def get_type(self, block: int) -> str:
        if block in self._engine.unreadable:
            raise RuntimeError(f'cannot read type of block {block}')
        return self._get(block).type

    def get_name(self, block: int) -> str:
        return self._get(block).name

    def set_metadata(self, block: int, key: str, value: str) -> None:
        self._get(block).metadata[key] = value

    def set_scope_enabled(self, block: int, scope: str, enabled: bool) -> None:
        self._get(block).scopes[scope] = enabled

    def get_string(self, block: int, prop: str) -> str:
        return self._get(block).text

    def get_width(self, block: int) -> float:
        return self._get(block).width

    def get_height(self, block: int) -> float:
        return self._get(block).height

    def destroy(self, block: int) -> None:
        if block in self._engine.undestroyable:
            raise RuntimeError(f'block {block} refuses to be destroyed')
        self._engine.blocks.pop(block)
        if block in self._engine.pages:
            self._engine.pages.remove(block)


class FakeEngine:
    """In-memory composition engine exposing the scene/block accessors the pipeline uses."""

    def __init__(self, *, with_scene: bool = False) -> None:
        self._ids = itertools.count(1)
        self.blocks: dict[int, FakeBlock] = {}
        self.pages: list[int] = []
        self.scene_id: int | None = None
        self.invalid: set[int] = set()
        self.unreadable: set[int] = set()
        self.broken_pages: set[int] = set()
        self.stuck: set[int] = set()
        self.undestroyable: set[int] = set()
        self.zoom_calls: list[tuple[int, float]] = []
        self.create_calls = 0
        self.scene_get_error: Exception | None = None
        self.get_pages_error: Exception | None = None
        self.is_valid_error: Exception | None = None
        self.create_error: Exception | None = None
        self.create_returns_none = False
        self.zoom_error: Exception | None = None
        self.scene: FakeSceneApi | None = FakeSceneApi(self)
        self.block: FakeBlockApi | None = FakeBlockApi(self)
        if with_scene:
            self.scene.create()

    def new_block(self, type_: str, **kwargs) -> int:
        handle = next(self._ids)
        self.blocks[handle] = FakeBlock(type=type_, **kwargs)
        return handle

    def add_page(self, child_types: list[str] | tuple[str, ...] = ()) -> int:
        page = self.new_block('//ly.img.ubq/page')
        for i, child_type in enumerate(child_types):
            self.blocks[page].children.append(self.new_block(child_type, name=f'layer-{i}', text=f'text {i}'))
        self.pages.append(page)
        return page

    def dispose(self) -> None:
        self.scene = None
        self.block = None

    def visible_pages(self) -> list[int]:
        return [i for i, p in enumerate(self.pages) if self.blocks[p].visible]


class FakeImportReport:
    def __init__(self, messages: list[str] | None = None) -> None:
        self._messages = messages or []

    def get_messages(self) -> list[str]:
        return list(self._messages)


class FakeImporter:
    """Fake import library: builds pages from a layout instead of decoding bytes."""

    def __init__(
        self,
        pages: list[list[str]] | None = None,
        messages: list[str] | None = None,
        error: Exception | None = None,
        hang: bool = False,
        dispose_engine: bool = False,
    ) -> None:
        self.pages = pages if pages is not None else [[IMAGE, TEXT, SHAPE]]
        self.messages = messages or ['Imported layers']
        self.error = error
        self.hang = hang
        self.dispose_engine = dispose_engine
        self.register_calls = 0
        self.import_calls: list[int] = []
        self.cancelled = False

    async def register_asset_library(self, engine) -> None:
        self.register_calls += 1

    async def import_document(self, engine, data: bytes) -> FakeImportReport:
        self.import_calls.append(len(data))
        if self.hang:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        for child_types in self.pages:
            engine.add_page(child_types)
        if self.dispose_engine:
            engine.dispose()
        return FakeImportReport(self.messages)


class FakeFetcher:
    """Fake BufferFetcher serving fixed buffers and emitting fetch progress."""

    def __init__(self, buffers: dict[str, bytes] | None = None, error: Exception | None = None) -> None:
        self.buffers = buffers or {}
        self.error = error
        self.fetch_calls: list[str] = []

    async def fetch(self, reference: str, on_progress=None) -> bytes:
        self.fetch_calls.append(reference)
        if self.error is not None:
            raise self.error
        if on_progress is not None:
            on_progress(ProgressEvent(ProgressStage.FETCHING, 'Downloading...', FETCH_SHARE // 2))
            on_progress(ProgressEvent(ProgressStage.FETCHING, 'Downloading...', FETCH_SHARE))
        return self.buffers[reference]


class ProgressRecorder:
    def __init__(self) -> None:
        self.events: list[ProgressEvent] = []

    def __call__(self, event: ProgressEvent) -> None:
        self.events.append(event)

    @property
    def percentages(self) -> list[int]:
        return [e.progress for e in self.events]

    def stages(self) -> list[ProgressStage]:
        return [e.stage for e in self.events]


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> IngestConfig:
    return build_ingest_config({})


@pytest.fixture
def fast_config() -> IngestConfig:
    return build_ingest_config({'parse': {'timeout': 0.05}})


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def fake_importer() -> FakeImporter:
    return FakeImporter()


@pytest.fixture
def cache() -> InMemoryBufferCache:
    return InMemoryBufferCache(capacity=2)


@pytest.fixture
def progress() -> ProgressRecorder:
    return ProgressRecorder()
