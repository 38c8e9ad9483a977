"""Shared path constants for configuration files."""

from __future__ import annotations

from platformdirs import user_config_path

CONFIG_DIR = user_config_path('template-ingest')

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]
