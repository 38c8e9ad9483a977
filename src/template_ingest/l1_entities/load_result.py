"""Outcome entities returned to callers of the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ItemOutcome:
    """Result of one iteration in a best-effort loop (page teardown, block configuration)."""

    item: Any
    ok: bool = True
    detail: str = ''


@dataclass(frozen=True)
class LoadResult:
    """Result of one pipeline run — either success with page info or failure with reason."""

    success: bool
    page_count: int = 0
    is_double_sided: bool = False
    page_index: int | None = None
    messages: list[str] = field(default_factory=list)
    diagnostics: list[ItemOutcome] = field(default_factory=list)
    error: str = ''
    step: str = ''

    @classmethod
    def failure(cls, error: str, step: str) -> LoadResult:
        return cls(success=False, error=error or 'Unknown error', step=step)


@dataclass(frozen=True)
class SideSwitchResult:
    success: bool
    page_index: int | None = None
    error: str = ''
