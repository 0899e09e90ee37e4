"""SearchBackend port - the remote full-text search service."""

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol

from indexsync.domain.index.model.document import SearchableDocument
from indexsync.domain.index.model.result import SearchResponse

RequestOptions = dict[str, Any]


class SearchBackend(Protocol):
    """Protocol for remote search backends.

    Every index is addressed by its full (prefixed) name. Request options
    (headers, timeout, query parameters) are interpreted by the backend only.
    Implementations raise BackendError on failure and never retry on their own
    behalf unless their client is configured to.
    """

    @abstractmethod
    async def save(
        self,
        documents: Sequence[SearchableDocument],
        request_options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """Add or replace documents.

        Returns:
            Backend response per full index name touched by the call.
        """
        ...

    @abstractmethod
    async def remove(
        self,
        documents: Sequence[SearchableDocument],
        request_options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        """Delete documents by object ID.

        Returns:
            Backend response per full index name touched by the call.
        """
        ...

    @abstractmethod
    async def search(
        self,
        query: str,
        index_name: str,
        request_options: RequestOptions | None = None,
    ) -> SearchResponse:
        """Run a query and return hits in ranking order."""
        ...

    @abstractmethod
    async def count(
        self,
        query: str,
        index_name: str,
        request_options: RequestOptions | None = None,
    ) -> int:
        """Number of documents matching ``query``."""
        ...

    @abstractmethod
    async def clear(self, index_name: str) -> dict[str, Any]:
        """Remove every document of an index, keeping the index itself."""
        ...

    @abstractmethod
    async def delete(self, index_name: str) -> dict[str, Any]:
        """Drop an index entirely."""
        ...

    @abstractmethod
    async def get_settings(self, index_name: str) -> dict[str, Any]:
        """Fetch the settings of an index."""
        ...

    @abstractmethod
    async def set_settings(self, index_name: str, settings: dict[str, Any]) -> dict[str, Any]:
        """Replace the settings of an index."""
        ...
