"""DocumentShaper port - turns records into search field maps."""

from abc import abstractmethod
from typing import Any, Protocol


class DocumentShaper(Protocol):
    """Serializes a record or aggregate into the fields sent to the backend."""

    @abstractmethod
    def to_document(self, subject: Any, *, use_serializer_group: bool = False) -> dict[str, Any]:
        """Shape ``subject`` into a JSON-compatible field map.

        Args:
            subject: Record or Aggregator instance.
            use_serializer_group: Only keep the fields the type marks as searchable.
        """
        ...
