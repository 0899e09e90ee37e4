"""Algolia search backend."""

from indexsync.infrastructure.algolia.backend import AlgoliaSearchBackend
from indexsync.infrastructure.algolia.config import AlgoliaConfig

__all__ = ["AlgoliaConfig", "AlgoliaSearchBackend"]
