"""Index registry - immutable lookup tables built from the search configuration."""

from collections.abc import Iterable, Iterator

from indexsync.domain.index.model.value import IndexConfig, SearchConfig
from indexsync.domain.shared.error import NotSearchableError


class IndexRegistry:
    """Registry of searchable record types and their target indices.

    Built once from a SearchConfig; never mutated afterwards.
    """

    def __init__(self, config: SearchConfig) -> None:
        self._config = config
        self._by_type: dict[type, IndexConfig] = {index.entity: index for index in config.indices}
        self._by_name: dict[str, IndexConfig] = {index.name: index for index in config.indices}

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def searchable_types(self) -> tuple[type, ...]:
        """Registered record types, in configuration order."""
        return tuple(self._by_type)

    def is_searchable(self, record_type: type) -> bool:
        return record_type in self._by_type

    def descriptor(self, record_type: type) -> IndexConfig:
        """Get the index configuration of a record type.

        Raises:
            NotSearchableError: If the type is not registered.
        """
        try:
            return self._by_type[record_type]
        except KeyError:
            raise NotSearchableError(record_type) from None

    def index_name(self, record_type: type) -> str:
        """Configured index name of a record type, without prefix."""
        return self.descriptor(record_type).name

    def full_index_name(self, record_type: type) -> str:
        """Backend index name of a record type (prefix + configured name)."""
        return self._config.full_index_name(self.index_name(record_type))

    def uses_serializer_group(self, record_type: type) -> bool:
        return self.descriptor(record_type).enable_serializer_groups

    def conditional_field_path(self, record_type: type) -> str | None:
        """Property path that decides whether records of this type are indexed.

        Returns None for unconditionally indexed and for unregistered types.
        """
        index = self._by_type.get(record_type)
        return index.index_if if index else None

    def types_for_indices(self, names: Iterable[str] | None = None) -> list[type]:
        """Record types registered for the given index names.

        All registered types are returned when ``names`` is empty or None.
        Unknown names are ignored.
        """
        wanted = set(names or ())
        if not wanted:
            return list(self._by_type)
        return [index.entity for index in self._config.indices if index.name in wanted]

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._by_type

    def __iter__(self) -> Iterator[type]:
        return iter(self._by_type)

    def __len__(self) -> int:
        return len(self._by_type)
