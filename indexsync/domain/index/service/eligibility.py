"""EligibilityEvaluator - decides whether a record belongs in its index."""

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from indexsync.domain.index.model.registry import IndexRegistry
from indexsync.domain.index.port.persistence import RecordProvider
from indexsync.domain.shared.error import UnreadablePropertyError

logger = logging.getLogger(__name__)


def read_path(subject: Any, path: str) -> Any:
    """Read a dotted property path on ``subject``.

    Each segment is looked up as a mapping key or an attribute (properties
    included). Callables are never called: a segment resolving to a method,
    function or builtin is unreadable, as is any segment below a None value.

    Raises:
        UnreadablePropertyError: If a segment cannot be read.
    """
    value = subject
    for segment in path.split("."):
        if value is None or not segment:
            raise UnreadablePropertyError(path, segment)
        if isinstance(value, Mapping):
            if segment not in value:
                raise UnreadablePropertyError(path, segment)
            value = value[segment]
        else:
            try:
                value = getattr(value, segment)
            except AttributeError:
                raise UnreadablePropertyError(path, segment) from None
        if inspect.isroutine(value):
            raise UnreadablePropertyError(path, segment)
    return value


class EligibilityEvaluator:
    """Answers whether a record is searchable and meets its index condition."""

    def __init__(self, registry: IndexRegistry, records: RecordProvider) -> None:
        self._registry = registry
        self._records = records

    def is_eligible(self, record: Any) -> bool:
        """Whether ``record`` should currently be present in its index.

        Records of unregistered types are never eligible. An unreadable
        condition path makes the record ineligible rather than failing.
        """
        record_type = self._records.class_of(record)
        if not self._registry.is_searchable(record_type):
            return False

        path = self._registry.conditional_field_path(record_type)
        if not path:
            return True

        try:
            return bool(read_path(record, path))
        except UnreadablePropertyError as e:
            logger.debug(f"{record_type.__qualname__} not eligible for indexing: {e.message}")
            return False
