"""SQLAlchemy implementation of the RecordProvider port."""

import logging
from collections.abc import AsyncIterator
from datetime import date, datetime, time
from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapper
from sqlalchemy.orm.state import InstanceState
from sqlalchemy.schema import Column

from indexsync.domain.index.model.identity import parse_object_id
from indexsync.domain.shared.error import InvalidObjectIdError, MissingIdentityError

logger = logging.getLogger(__name__)


class SqlAlchemyRecordProvider:
    """Resolves and loads ORM-mapped records through an AsyncSession.

    Types and identities come from the mapper, so subclasses loaded through
    polymorphic queries resolve to their concrete mapped class. Objects that
    are not mapped (aggregates) resolve to their own type.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def class_of(self, record: Any) -> type:
        state = inspect(record, raiseerr=False)
        if isinstance(state, InstanceState):
            return state.mapper.class_
        return type(record)

    def identity_of(self, record: Any) -> dict[str, Any]:
        state = inspect(record, raiseerr=False)
        if not isinstance(state, InstanceState):
            raise MissingIdentityError(f"{type(record).__qualname__} is not a mapped record")

        mapper = state.mapper
        values = mapper.primary_key_from_instance(record)
        if all(value is None for value in values):
            raise MissingIdentityError(
                f"{mapper.class_.__qualname__} record has no primary key yet"
            )
        return {
            mapper.get_property_by_column(column).key: value
            for column, value in zip(mapper.primary_key, values)
        }

    async def find_by_identity(self, record_type: type, object_id: str) -> Any | None:
        mapper: Mapper = inspect(record_type)
        keys = [mapper.get_property_by_column(column).key for column in mapper.primary_key]

        try:
            identity = parse_object_id(object_id, keys)
            values = tuple(
                _coerce(column, identity[key]) for column, key in zip(mapper.primary_key, keys)
            )
        except (InvalidObjectIdError, ValueError, TypeError) as e:
            logger.debug(
                f"Object ID '{object_id}' does not identify a {record_type.__qualname__}: {e}"
            )
            return None

        return await self.session.get(record_type, values[0] if len(values) == 1 else values)

    async def iter_batches(self, record_type: type, batch_size: int) -> AsyncIterator[list[Any]]:
        mapper: Mapper = inspect(record_type)
        offset = 0
        while True:
            stmt = (
                select(record_type)
                .order_by(*mapper.primary_key)
                .limit(batch_size)
                .offset(offset)
            )
            batch = list((await self.session.scalars(stmt)).all())
            if not batch:
                return
            yield batch
            offset += len(batch)


def _coerce(column: Column, value: str) -> Any:
    """Convert an object ID component to the primary key column's Python type."""
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    if isinstance(value, python_type):
        return value
    if python_type in (date, datetime, time):
        return python_type.fromisoformat(value)
    return python_type(value)
