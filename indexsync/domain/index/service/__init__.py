"""Index domain services."""

from indexsync.domain.index.service.aggregate import AggregateResolver
from indexsync.domain.index.service.dispatch import BatchDispatcher
from indexsync.domain.index.service.eligibility import EligibilityEvaluator, read_path
from indexsync.domain.index.service.importer import RecordImporter
from indexsync.domain.index.service.index import IndexService

__all__ = [
    "AggregateResolver",
    "BatchDispatcher",
    "EligibilityEvaluator",
    "IndexService",
    "RecordImporter",
    "read_path",
]
