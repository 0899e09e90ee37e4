"""IndexService - orchestrates indexing of records into the search backend."""

import logging
from collections.abc import Collection, Iterator, Mapping
from typing import Any

from indexsync.domain.index.model.aggregate import Aggregator
from indexsync.domain.index.model.document import SearchableDocument
from indexsync.domain.index.model.identity import format_object_id
from indexsync.domain.index.model.registry import IndexRegistry
from indexsync.domain.index.model.result import SearchResponse
from indexsync.domain.index.model.value import SearchConfig
from indexsync.domain.index.port.backend import RequestOptions, SearchBackend
from indexsync.domain.index.port.persistence import RecordProvider
from indexsync.domain.index.port.shaper import DocumentShaper
from indexsync.domain.index.service.aggregate import AggregateResolver
from indexsync.domain.index.service.dispatch import BatchDispatcher
from indexsync.domain.index.service.eligibility import EligibilityEvaluator
from indexsync.domain.shared.error import InvalidObjectIdError
from indexsync.domain.shared.service import Service

logger = logging.getLogger(__name__)

BatchResults = list[dict[str, Any]]


class IndexService(Service):
    """Keeps the search backend in sync with persisted records.

    Every call is sequential: removals triggered by ``index`` finish before
    the first save group is sent, and groups are awaited one by one.
    """

    registry: IndexRegistry
    aggregates: AggregateResolver
    eligibility: EligibilityEvaluator
    dispatcher: BatchDispatcher
    backend: SearchBackend
    records: RecordProvider
    shaper: DocumentShaper

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def get_configuration(self) -> SearchConfig:
        return self.registry.config

    @property
    def searchable_types(self) -> tuple[type, ...]:
        return self.registry.searchable_types

    def is_searchable(self, record_type: type) -> bool:
        return self.registry.is_searchable(record_type)

    def full_index_name(self, record_type: type) -> str:
        """Backend index name of a record type.

        Raises:
            NotSearchableError: If the type is not registered.
        """
        return self.registry.full_index_name(record_type)

    def should_be_indexed(self, record: Any) -> bool:
        """Whether a record is searchable and satisfies its index condition."""
        return self.eligibility.is_eligible(record)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def index(
        self,
        records: Any,
        request_options: RequestOptions | None = None,
    ) -> BatchResults:
        """Index records (and their aggregates) into their target indices.

        Searchable records failing their index condition are removed from
        the backend instead, before anything is saved.

        Args:
            records: A single record or a collection of records.
            request_options: Passed through to the backend.

        Returns:
            One backend result per dispatched save group.
        """
        searchable = self._searchable(self._expand(records))

        to_index: list[Any] = []
        to_remove: list[Any] = []
        for record in searchable:
            if self.eligibility.is_eligible(record):
                to_index.append(record)
            else:
                to_remove.append(record)

        if to_remove:
            logger.debug(f"Removing {len(to_remove)} records that no longer qualify for indexing")
            await self.dispatcher.dispatch(
                to_remove,
                self._build_document,
                lambda group: self.backend.remove(group, request_options),
            )

        logger.debug(f"Indexing {len(to_index)} records")
        return await self.dispatcher.dispatch(
            to_index,
            self._build_document,
            lambda group: self.backend.save(group, request_options),
        )

    async def remove(
        self,
        records: Any,
        request_options: RequestOptions | None = None,
    ) -> BatchResults:
        """Remove records (and their aggregates) from their target indices.

        Eligibility is not consulted: any searchable record is removed.
        """
        to_remove = self._searchable(self._expand(records))

        logger.debug(f"Removing {len(to_remove)} records")
        return await self.dispatcher.dispatch(
            to_remove,
            self._build_document,
            lambda group: self.backend.remove(group, request_options),
        )

    async def clear(self, record_type: type) -> dict[str, Any]:
        """Remove every document from the index of ``record_type``."""
        index_name = self.full_index_name(record_type)
        logger.info(f"Clearing index '{index_name}'")
        return await self.backend.clear(index_name)

    async def delete(self, record_type: type) -> dict[str, Any]:
        """Drop the index of ``record_type``."""
        index_name = self.full_index_name(record_type)
        logger.info(f"Deleting index '{index_name}'")
        return await self.backend.delete(index_name)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def search(
        self,
        query: str,
        record_type: type,
        request_options: RequestOptions | None = None,
    ) -> list[Any]:
        """Search the index of ``record_type`` and load the matching records.

        Results follow the backend ranking. Hits whose record no longer
        exists are dropped. For aggregate types the results are the
        underlying records, possibly of several types.
        """
        response = await self.raw_search(query, record_type, request_options)
        is_aggregate = self.aggregates.is_aggregate(record_type)

        results = []
        for object_id in response.object_ids:
            if is_aggregate:
                try:
                    entity_type = record_type.entity_class_from_object_id(object_id)
                    entity_id = record_type.entity_id_from_object_id(object_id)
                except InvalidObjectIdError as e:
                    logger.debug(f"Skipping hit '{object_id}': {e.message}")
                    continue
            else:
                entity_type, entity_id = record_type, object_id

            record = await self.records.find_by_identity(entity_type, entity_id)
            if record is None:
                logger.debug(f"Skipping stale hit '{object_id}' in results for {query!r}")
                continue
            results.append(record)

        return results

    async def raw_search(
        self,
        query: str,
        record_type: type,
        request_options: RequestOptions | None = None,
    ) -> SearchResponse:
        """Search the index of ``record_type`` and return the backend response."""
        return await self.backend.search(
            query, self.full_index_name(record_type), request_options
        )

    async def count(
        self,
        query: str,
        record_type: type,
        request_options: RequestOptions | None = None,
    ) -> int:
        """Number of documents matching ``query`` in the index of ``record_type``."""
        return await self.backend.count(
            query, self.full_index_name(record_type), request_options
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _expand(self, records: Any) -> list[Any]:
        """Input records followed by every aggregate derived from them."""
        records = list(_as_iterable(records))
        derived: list[Aggregator] = []

        for record in records:
            record_type = self.records.class_of(record)
            aggregate_types = self.aggregates.aggregate_types_for(record_type)
            if not aggregate_types:
                continue
            identity = self.records.identity_of(record)
            for aggregate_type in aggregate_types:
                derived.append(
                    self.aggregates.build_aggregate(aggregate_type, record, record_type, identity)
                )

        return records + derived

    def _searchable(self, records: list[Any]) -> list[Any]:
        return [
            record
            for record in records
            if self.registry.is_searchable(self.records.class_of(record))
        ]

    def _build_document(self, record: Any) -> SearchableDocument:
        record_type = self.records.class_of(record)
        if isinstance(record, Aggregator):
            object_id = record.object_id
        else:
            object_id = format_object_id(self.records.identity_of(record))

        return SearchableDocument(
            index_name=self.registry.full_index_name(record_type),
            object_id=object_id,
            subject=record,
            shaper=self.shaper,
            use_serializer_group=self.registry.uses_serializer_group(record_type),
        )


def _as_iterable(records: Any) -> Iterator[Any]:
    """Yield the records of a collection, or a lone record itself.

    Mappings, strings and bytes count as single records.
    """
    is_collection = isinstance(records, (Collection, Iterator))
    if is_collection and not isinstance(records, (str, bytes, Mapping)):
        yield from records
    else:
        yield records
