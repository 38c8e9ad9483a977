"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from template_ingest.l1_entities.config import IngestConfig
from template_ingest.l2_use_cases.ports.buffer_cache import BufferCache
from template_ingest.l2_use_cases.ports.buffer_fetcher import BufferFetcher
from template_ingest.l2_use_cases.ports.template_importer import TemplateImporter
from template_ingest.l3_interface_adapters.controllers.template_controller import TemplateController
from template_ingest.l3_interface_adapters.gateways.httpx_buffer_fetcher import HttpxBufferFetcher
from template_ingest.l3_interface_adapters.gateways.memory_buffer_cache import InMemoryBufferCache
from template_ingest.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing.

    The importer is supplied by the host application together with its engine;
    without one only the fetch side is usable (e.g. from the CLI).
    """

    def __init__(
        self,
        config: IngestConfig,
        importer: TemplateImporter | None = None,
        fetcher: BufferFetcher | None = None,
        cache: BufferCache | None = None,
    ) -> None:
        self.config = config
        self.fetcher: BufferFetcher = fetcher or HttpxBufferFetcher(
            base_url=config.fetch.base_url,
            chunk_size=config.fetch.chunk_size,
            timeout=config.fetch.timeout,
        )
        self.cache: BufferCache = cache if cache is not None else InMemoryBufferCache(config.cache.capacity)
        self.importer = importer
        self.controller = (
            TemplateController(
                config=config,
                fetcher=self.fetcher,
                importer=importer,
                cache=self.cache,
            )
            if importer is not None
            else None
        )

    @staticmethod
    def config_loader() -> YamlConfigLoader:
        return YamlConfigLoader()
