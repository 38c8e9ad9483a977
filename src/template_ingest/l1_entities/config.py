"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field

MB = 1024 * 1024


class FetchConfig(BaseModel):
    base_url: str = ''
    chunk_size: int = Field(gt=0)
    timeout: float = Field(gt=0)
    large_file_warning_mb: float

    @property
    def large_file_warning_bytes(self) -> int:
        return int(self.large_file_warning_mb * MB)


class CacheConfig(BaseModel):
    capacity: int = Field(ge=1)
    max_entry_mb: float  # successful loads at or above this size are not cached

    @property
    def max_entry_bytes(self) -> int:
        return int(self.max_entry_mb * MB)


class ParseConfig(BaseModel):
    timeout: float = Field(gt=0)
    min_buffer_bytes: int
    signature: str


class ViewportConfig(BaseModel):
    zoom_margin: float = Field(gt=0, le=1)


class IngestConfig(BaseModel):
    fetch: FetchConfig
    cache: CacheConfig
    parse: ParseConfig
    viewport: ViewportConfig
