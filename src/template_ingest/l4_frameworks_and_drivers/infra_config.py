"""Infrastructure defaults — lives in L4, not domain."""

from __future__ import annotations

import copy

from template_ingest.l1_entities.config import IngestConfig
from template_ingest.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

INGEST_CONFIG_DEFAULTS: dict = {
    'fetch': {
        'base_url': '',
        'chunk_size': 64 * 1024,
        'timeout': 60.0,
        'large_file_warning_mb': 20,
    },
    'cache': {
        'capacity': 2,
        'max_entry_mb': 50,
    },
    'parse': {
        'timeout': 120.0,
        'min_buffer_bytes': 1000,
        'signature': '8BPS',
    },
    'viewport': {
        'zoom_margin': 0.8,
    },
}


def build_ingest_config(raw: dict | None = None) -> IngestConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(INGEST_CONFIG_DEFAULTS)
    deep_merge(merged, raw or {})
    return IngestConfig.model_validate(merged)
