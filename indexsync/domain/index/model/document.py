"""SearchableDocument - the unit of work sent to a search backend."""

from dataclasses import dataclass
from typing import Any

from indexsync.domain.index.port.shaper import DocumentShaper

OBJECT_ID_FIELD = "objectID"


@dataclass(frozen=True)
class SearchableDocument:
    """A record (or aggregate) addressed to one backend index.

    Attributes:
        index_name: Full (prefixed) index name.
        object_id: Backend document ID.
        subject: The record or aggregate instance to shape.
        shaper: Turns ``subject`` into a field map.
        use_serializer_group: Restrict shaping to the type's searchable fields.
    """

    index_name: str
    object_id: str
    subject: Any
    shaper: DocumentShaper
    use_serializer_group: bool = False

    def fields(self) -> dict[str, Any]:
        """Shaped field map of the subject, without the object ID."""
        return self.shaper.to_document(
            self.subject, use_serializer_group=self.use_serializer_group
        )

    def to_payload(self) -> dict[str, Any]:
        """Field map ready to be sent, including the object ID.

        Returns an empty dict when the subject shapes to no fields.
        """
        fields = self.fields()
        if not fields:
            return {}
        return {**fields, OBJECT_ID_FIELD: self.object_id}
