"""Domain error types."""

from __future__ import annotations


class TemplateIngestError(Exception):
    """Base for every failure the ingestion pipeline reports."""

    step: str = 'pipeline'


class FetchError(TemplateIngestError):
    """Raised when a template buffer cannot be retrieved."""

    step = 'fetch'

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        status_text: str = '',
        cause: str = '',
    ) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.cause = cause


class CorruptBufferError(TemplateIngestError):
    """Raised when a buffer is too small to be a layered document."""

    step = 'validate'


class EngineDisposedError(TemplateIngestError):
    """Raised when the composition engine has been torn down or is unusable."""

    step = 'engine'


class SceneError(TemplateIngestError):
    """Raised when the target scene cannot be created or cleared."""

    step = 'scene'


class ParseTimeoutError(TemplateIngestError):
    """Raised when the import call does not settle within the parse timeout."""

    step = 'parse'


class ParseError(TemplateIngestError):
    """Raised when the import call fails or produces no pages."""

    step = 'parse'


class PageNotFoundError(TemplateIngestError):
    """Raised when a requested side resolves to an out-of-range page index."""

    step = 'visibility'
