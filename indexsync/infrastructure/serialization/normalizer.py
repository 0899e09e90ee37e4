"""Default DocumentShaper: converts records into JSON-compatible field maps."""

import dataclasses
from typing import Any

from pydantic import BaseModel
from pydantic_core import to_jsonable_python
from sqlalchemy import inspect
from sqlalchemy.orm.state import InstanceState

from indexsync.domain.index.model.aggregate import Aggregator

SEARCHABLE_FIELDS_ATTR = "__searchable__"
CUSTOM_HOOK = "to_search_document"


class RecordNormalizer:
    """Shapes records into search documents.

    Resolution order for a record:

    1. Aggregators are shaped through their underlying record.
    2. A ``to_search_document(serializer_group: bool) -> dict`` method on the
       record wins over everything else.
    3. Pydantic models, dataclasses and SQLAlchemy mapped objects are dumped
       field by field; any other object falls back to ``vars()``.

    With serializer groups enabled, only the fields named in the record
    class's ``__searchable__`` attribute are kept.
    """

    def to_document(self, subject: Any, *, use_serializer_group: bool = False) -> dict[str, Any]:
        if isinstance(subject, Aggregator):
            return self.to_document(subject.record, use_serializer_group=use_serializer_group)

        hook = getattr(subject, CUSTOM_HOOK, None)
        if callable(hook):
            fields = dict(hook(use_serializer_group))
        else:
            fields = self._fields(subject)
            if use_serializer_group:
                allowed = getattr(type(subject), SEARCHABLE_FIELDS_ATTR, ())
                fields = {key: value for key, value in fields.items() if key in allowed}

        return to_jsonable_python(fields)

    def _fields(self, subject: Any) -> dict[str, Any]:
        if isinstance(subject, BaseModel):
            return subject.model_dump()

        if dataclasses.is_dataclass(subject) and not isinstance(subject, type):
            return {
                field.name: getattr(subject, field.name) for field in dataclasses.fields(subject)
            }

        state = inspect(subject, raiseerr=False)
        if isinstance(state, InstanceState):
            return {attr.key: getattr(subject, attr.key) for attr in state.mapper.column_attrs}

        return {key: value for key, value in vars(subject).items() if not key.startswith("_")}
