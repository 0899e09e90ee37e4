"""Aggregator - base class for documents that merge several record types."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from typing_extensions import Self

from indexsync.domain.shared.error import InvalidObjectIdError, MissingIdentityError

OBJECT_ID_SEPARATOR = "::"


@dataclass(frozen=True)
class Aggregator:
    """A derived search document standing for a record of one of several types.

    Subclass it, list the subsumed record types in ``entities`` and register
    the subclass as the entity of an index::

        class ContentAggregator(Aggregator):
            entities = (Post, Comment)

    Every indexed Post and Comment then also produces a ContentAggregator
    document whose object ID is ``"<RecordType>::<first identity value>"``,
    so records of different types never collide inside the shared index.

    Attributes:
        record: The underlying record.
        record_type: Resolved (non-proxy) type of the underlying record.
        object_id: Composite document ID.
    """

    entities: ClassVar[tuple[type, ...]] = ()

    record: Any
    record_type: type
    object_id: str

    @classmethod
    def from_record(cls, record: Any, record_type: type, identity: Mapping[str, Any]) -> Self:
        """Build an aggregate instance from an already resolved identity.

        Raises:
            MissingIdentityError: If ``identity`` is empty.
        """
        if not identity:
            raise MissingIdentityError(
                f"Cannot aggregate {record_type.__qualname__} without identity values"
            )
        first_value = next(iter(identity.values()))
        object_id = f"{record_type.__name__}{OBJECT_ID_SEPARATOR}{first_value}"
        return cls(record=record, record_type=record_type, object_id=object_id)

    @classmethod
    def entity_class_from_object_id(cls, object_id: str) -> type:
        """Record type encoded in an aggregate object ID."""
        name, sep, _ = object_id.partition(OBJECT_ID_SEPARATOR)
        if not sep:
            raise InvalidObjectIdError(f"'{object_id}' is not an aggregate object ID")
        for entity in cls.entities:
            if entity.__name__ == name:
                return entity
        raise InvalidObjectIdError(f"{cls.__qualname__} does not aggregate '{name}'")

    @classmethod
    def entity_id_from_object_id(cls, object_id: str) -> str:
        """Record identity encoded in an aggregate object ID."""
        _, sep, entity_id = object_id.partition(OBJECT_ID_SEPARATOR)
        if not sep:
            raise InvalidObjectIdError(f"'{object_id}' is not an aggregate object ID")
        return entity_id


def is_aggregator(record_type: type) -> bool:
    """Whether ``record_type`` is an Aggregator subclass."""
    return isinstance(record_type, type) and issubclass(record_type, Aggregator)
