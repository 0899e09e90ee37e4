"""Type-safe result types for backend search queries."""

from typing import Any

from pydantic import BaseModel


class SearchHit(BaseModel, frozen=True):
    """A single ranked hit returned by the backend."""

    object_id: str
    fields: dict[str, Any] = {}


class SearchResponse(BaseModel, frozen=True):
    """Result of a backend search query, hits in ranking order."""

    hits: list[SearchHit]
    total: int
    query: str
    raw: dict[str, Any] = {}

    @property
    def object_ids(self) -> list[str]:
        """Object IDs of the hits, in ranking order."""
        return [hit.object_id for hit in self.hits]
