"""RecordImporter - (re)indexes every stored record of the configured types."""

import logging
from collections.abc import Iterable

from indexsync.domain.index.model.aggregate import is_aggregator
from indexsync.domain.index.port.persistence import RecordProvider
from indexsync.domain.index.service.index import IndexService
from indexsync.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RecordImporter(Service):
    """Bulk indexing of stored records, page by page.

    Aggregate types are never loaded themselves: the record types they
    subsume are imported instead, which also produces the aggregate
    documents through IndexService.index.
    """

    service: IndexService
    records: RecordProvider

    def types_to_import(self, index_names: Iterable[str] | None = None) -> list[type]:
        """Record types to load for the given indices (all when empty).

        Returns:
            Distinct record types, in configuration order.
        """
        selected = self.service.registry.types_for_indices(index_names)

        types: list[type] = []
        for record_type in selected:
            expanded = record_type.entities if is_aggregator(record_type) else (record_type,)
            for entity in expanded:
                if entity not in types:
                    types.append(entity)
        return types

    async def run(
        self,
        index_names: Iterable[str] | None = None,
        *,
        clear: bool = False,
    ) -> dict[type, int]:
        """Index all stored records of the selected indices.

        Args:
            index_names: Configured index names; all indices when empty.
            clear: Clear each selected index before importing.

        Returns:
            Number of records read per imported record type.
        """
        index_names = list(index_names or ())
        batch_size = self.service.get_configuration().batch_size

        if clear:
            for record_type in self.service.registry.types_for_indices(index_names):
                await self.service.clear(record_type)

        imported: dict[type, int] = {}
        for record_type in self.types_to_import(index_names):
            count = 0
            async for batch in self.records.iter_batches(record_type, batch_size):
                await self.service.index(batch)
                count += len(batch)
                logger.debug(f"Imported {count} {record_type.__qualname__} records so far")
            imported[record_type] = count
            logger.info(f"Imported {count} {record_type.__qualname__} records")

        return imported
