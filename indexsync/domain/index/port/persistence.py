"""RecordProvider port - the persistence collaborator of the indexing engine."""

from abc import abstractmethod
from collections.abc import AsyncIterator
from typing import Any, Protocol


class RecordProvider(Protocol):
    """Resolves record types and identities and loads records back.

    Persistence layers may hand out lazy-loading stand-ins for records;
    ``class_of`` must always answer with the real record type.
    """

    @abstractmethod
    def class_of(self, record: Any) -> type:
        """Resolve the true record type, looking through proxies."""
        ...

    @abstractmethod
    def identity_of(self, record: Any) -> dict[str, Any]:
        """Identity values of a record, keyed by identity attribute name."""
        ...

    @abstractmethod
    async def find_by_identity(self, record_type: type, object_id: str) -> Any | None:
        """Load the live record behind a backend object ID, or None if it is gone."""
        ...

    @abstractmethod
    def iter_batches(self, record_type: type, batch_size: int) -> AsyncIterator[list[Any]]:
        """Iterate over all stored records of a type, ``batch_size`` at a time."""
        ...
