"""SQLAlchemy persistence adapters."""

from indexsync.infrastructure.persistence.provider import SqlAlchemyRecordProvider

__all__ = ["SqlAlchemyRecordProvider"]
