"""Port: layered-document import library supplied alongside the engine."""

from __future__ import annotations

from typing import Protocol

from template_ingest.l2_use_cases.ports.composition_engine import CompositionEngine


class ImportReport(Protocol):
    """Diagnostics object returned by an import run."""

    def get_messages(self) -> list[str]: ...


class TemplateImporter(Protocol):
    """Abstract importer. Decoding the byte format is entirely its concern."""

    async def register_asset_library(self, engine: CompositionEngine) -> None:
        """Make the default font set available to imported text blocks. Idempotent."""
        ...

    async def import_document(self, engine: CompositionEngine, data: bytes) -> ImportReport:
        """Populate the current scene with one or more pages decoded from *data*.

        The importer owns the image-encoding callback its decoder needs to turn
        embedded raster layers into engine images; callers only pass the bytes.
        Must honor task cancellation: a timed-out import is cancelled, not abandoned.
        """
        ...
