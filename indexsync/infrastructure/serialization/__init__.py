"""Record serialization for search documents."""

from indexsync.infrastructure.serialization.normalizer import RecordNormalizer

__all__ = ["RecordNormalizer"]
