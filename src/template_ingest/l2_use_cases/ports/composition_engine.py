"""Port: live document-composition engine.

Only the operations the ingestion pipeline consumes are declared here. Handles
are opaque values owned by the engine (typically ints).
"""

from __future__ import annotations

from typing import Any, Protocol

BlockHandle = Any


class SceneApi(Protocol):
    """Scene accessor of the engine."""

    def get(self) -> BlockHandle | None:
        """Return the current scene handle, or None when no scene exists."""
        ...

    def create(self) -> BlockHandle:
        """Create a new scene and make it current."""
        ...

    def get_pages(self) -> list[BlockHandle]:
        """List the pages of the current scene in document order."""
        ...

    async def zoom_to_block(self, block: BlockHandle, margin: float) -> None:
        """Frame *block* in the viewport, using *margin* of the available space."""
        ...


class BlockApi(Protocol):
    """Block accessor of the engine."""

    def is_valid(self, block: BlockHandle) -> bool: ...

    def get_children(self, block: BlockHandle) -> list[BlockHandle]: ...

    def set_visible(self, block: BlockHandle, visible: bool) -> None: ...

    def get_type(self, block: BlockHandle) -> str: ...

    def get_name(self, block: BlockHandle) -> str: ...

    def set_metadata(self, block: BlockHandle, key: str, value: str) -> None: ...

    def set_scope_enabled(self, block: BlockHandle, scope: str, enabled: bool) -> None: ...

    def get_string(self, block: BlockHandle, prop: str) -> str: ...

    def get_width(self, block: BlockHandle) -> float: ...

    def get_height(self, block: BlockHandle) -> float: ...

    def destroy(self, block: BlockHandle) -> None: ...


class CompositionEngine(Protocol):
    """A live engine instance. Either accessor may disappear once the engine is disposed."""

    scene: SceneApi | None
    block: BlockApi | None
