"""AggregateResolver - maps record types to the aggregates that subsume them."""

from collections.abc import Callable, Mapping
from typing import Any

from indexsync.domain.index.model.aggregate import Aggregator, is_aggregator
from indexsync.domain.index.model.registry import IndexRegistry
from indexsync.domain.shared.error import NotSearchableError

AggregateFactory = Callable[[Any, type, Mapping[str, Any]], Aggregator]


class AggregateResolver:
    """Reverse index of registered aggregates, built once from the registry.

    Several aggregates may subsume the same record type; a record of that type
    then fans out into one aggregate instance per aggregate type.
    """

    def __init__(self, registry: IndexRegistry) -> None:
        self._factories: dict[type[Aggregator], AggregateFactory] = {}
        self._by_entity: dict[type, list[type[Aggregator]]] = {}

        for record_type in registry.searchable_types:
            if not is_aggregator(record_type):
                continue
            self._factories[record_type] = record_type.from_record
            for entity in record_type.entities:
                self._by_entity.setdefault(entity, []).append(record_type)

    @property
    def aggregate_types(self) -> tuple[type[Aggregator], ...]:
        return tuple(self._factories)

    def is_aggregate(self, record_type: type) -> bool:
        return record_type in self._factories

    def aggregate_types_for(self, record_type: type) -> tuple[type[Aggregator], ...]:
        """Registered aggregates subsuming ``record_type``, in configuration order."""
        return tuple(self._by_entity.get(record_type, ()))

    def build_aggregate(
        self,
        aggregate_type: type[Aggregator],
        record: Any,
        record_type: type,
        identity: Mapping[str, Any],
    ) -> Aggregator:
        """Materialize an aggregate instance. Pure, performs no I/O.

        Raises:
            NotSearchableError: If ``aggregate_type`` is not a registered aggregate.
        """
        try:
            factory = self._factories[aggregate_type]
        except KeyError:
            raise NotSearchableError(aggregate_type) from None
        return factory(record, record_type, identity)
