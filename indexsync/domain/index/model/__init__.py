"""Index domain models."""

from indexsync.domain.index.model.aggregate import Aggregator, is_aggregator
from indexsync.domain.index.model.document import SearchableDocument
from indexsync.domain.index.model.registry import IndexRegistry
from indexsync.domain.index.model.result import SearchHit, SearchResponse
from indexsync.domain.index.model.value import IndexConfig, SearchConfig

__all__ = [
    "Aggregator",
    "IndexConfig",
    "IndexRegistry",
    "SearchConfig",
    "SearchHit",
    "SearchResponse",
    "SearchableDocument",
    "is_aggregator",
]
