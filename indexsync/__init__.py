"""indexsync - keep persisted records in sync with a remote search index."""

__version__ = "0.1.0"
