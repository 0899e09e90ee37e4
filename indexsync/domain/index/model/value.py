"""Index configuration value objects."""

from pydantic import BaseModel, ImportString, PositiveInt, model_validator
from typing_extensions import Self


class IndexConfig(BaseModel, frozen=True):
    """Configuration for one search index.

    ``entity`` accepts either a record class or a dotted import path to one
    (``"blog.models.Post"``). Paths are imported once, when the configuration
    is loaded.
    """

    name: str  # Index name without prefix
    entity: ImportString[type]
    enable_serializer_groups: bool = False
    index_if: str | None = None  # Dotted property path, e.g. "is_published"


class SearchConfig(BaseModel, frozen=True):
    """Indexing configuration shared by every component of the engine."""

    prefix: str = ""
    batch_size: PositiveInt = 500
    indices: tuple[IndexConfig, ...] = ()

    @model_validator(mode="after")
    def check_unique_indices(self) -> Self:
        """Reject configurations that declare an index name or entity twice."""
        names: set[str] = set()
        entities: set[type] = set()
        for index in self.indices:
            if index.name in names:
                raise ValueError(f"Index '{index.name}' is declared more than once")
            if index.entity in entities:
                raise ValueError(
                    f"Entity {index.entity.__qualname__} is mapped to more than one index"
                )
            names.add(index.name)
            entities.add(index.entity)
        return self

    def full_index_name(self, name: str) -> str:
        """Return the backend name of the configured index ``name``."""
        return f"{self.prefix}{name}"
