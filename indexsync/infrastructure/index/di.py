"""Dependency injection provider for the indexing engine."""

from typing import AsyncIterable

import httpx
from dishka import Provider, provide

from indexsync.config import Config
from indexsync.domain.index.model.registry import IndexRegistry
from indexsync.domain.index.model.value import SearchConfig
from indexsync.domain.index.port.backend import SearchBackend
from indexsync.domain.index.port.persistence import RecordProvider
from indexsync.domain.index.port.shaper import DocumentShaper
from indexsync.domain.index.service.aggregate import AggregateResolver
from indexsync.domain.index.service.dispatch import BatchDispatcher
from indexsync.domain.index.service.eligibility import EligibilityEvaluator
from indexsync.domain.index.service.importer import RecordImporter
from indexsync.domain.index.service.index import IndexService
from indexsync.infrastructure.algolia.backend import AlgoliaSearchBackend
from indexsync.infrastructure.serialization.normalizer import RecordNormalizer
from indexsync.infrastructure.settings.manager import SettingsManager
from indexsync.util.di.scope import Scope


class IndexProvider(Provider):
    """Provides the configured indexing engine."""

    @provide(scope=Scope.APP)
    def get_search_config(self, config: Config) -> SearchConfig:
        return config.search

    @provide(scope=Scope.APP)
    def get_registry(self, config: SearchConfig) -> IndexRegistry:
        return IndexRegistry(config)

    @provide(scope=Scope.APP)
    def get_aggregates(self, registry: IndexRegistry) -> AggregateResolver:
        return AggregateResolver(registry)

    @provide(scope=Scope.APP)
    def get_dispatcher(self, config: SearchConfig) -> BatchDispatcher:
        return BatchDispatcher(config.batch_size)

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Config) -> AsyncIterable[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            base_url=config.algolia.base_url,
            timeout=config.algolia.timeout,
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_backend(self, client: httpx.AsyncClient, config: Config) -> SearchBackend:
        return AlgoliaSearchBackend(client, config.algolia)

    @provide(scope=Scope.APP)
    def get_shaper(self) -> DocumentShaper:
        return RecordNormalizer()

    @provide(scope=Scope.APP)
    def get_settings_manager(self, backend: SearchBackend, config: Config) -> SettingsManager:
        return SettingsManager(backend, config.search, config.settings.directory)

    @provide(scope=Scope.UOW)
    def get_eligibility(
        self, registry: IndexRegistry, records: RecordProvider
    ) -> EligibilityEvaluator:
        return EligibilityEvaluator(registry, records)

    @provide(scope=Scope.UOW)
    def get_index_service(
        self,
        registry: IndexRegistry,
        aggregates: AggregateResolver,
        eligibility: EligibilityEvaluator,
        dispatcher: BatchDispatcher,
        backend: SearchBackend,
        records: RecordProvider,
        shaper: DocumentShaper,
    ) -> IndexService:
        return IndexService(
            registry=registry,
            aggregates=aggregates,
            eligibility=eligibility,
            dispatcher=dispatcher,
            backend=backend,
            records=records,
            shaper=shaper,
        )

    @provide(scope=Scope.UOW)
    def get_importer(self, service: IndexService, records: RecordProvider) -> RecordImporter:
        return RecordImporter(service=service, records=records)
