"""Progress event entity emitted while a template loads."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

FETCH_SHARE = 50  # fetch reports 0-50, parsing 50-100


class ProgressStage(enum.Enum):
    FETCHING = 'fetching'
    CACHED = 'cached'
    PROCESSING = 'processing'
    PARSING = 'parsing'
    WARNING = 'warning'
    COMPLETE = 'complete'


@dataclass(frozen=True)
class ProgressEvent:
    """Transient pipeline state for UI feedback. Never persisted."""

    stage: ProgressStage
    message: str
    progress: int = 0


ProgressCallback = Callable[[ProgressEvent], None]


def fetch_progress(bytes_read: int, total: int) -> int:
    """Map a download ratio onto the fetch half of the progress range."""
    if total <= 0:
        return FETCH_SHARE
    return min(round(bytes_read / total * FETCH_SHARE), FETCH_SHARE)


def emit(on_progress: ProgressCallback | None, stage: ProgressStage, message: str, progress: int) -> None:
    if on_progress is not None:
        on_progress(ProgressEvent(stage=stage, message=message, progress=progress))
