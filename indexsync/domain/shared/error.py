"""Error hierarchy for indexsync.

Error layers:
- IndexSyncError: Base class for all indexsync errors
- DomainError: Misuse of the indexing API or invalid records (caller's fault)
- InfrastructureError: Search backend or configuration failures

None of these errors are retried internally. Retry policy belongs to the caller.
"""


class IndexSyncError(Exception):
    """Base class for all indexsync errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(IndexSyncError):
    """Base class for domain errors."""


class NotSearchableError(DomainError):
    """A type-addressed operation was invoked with an unregistered record type."""

    def __init__(self, record_type: type) -> None:
        super().__init__(f"Class {record_type.__qualname__} is not searchable.")
        self.record_type = record_type


class MissingIdentityError(DomainError):
    """A record has no identity values and cannot become a document."""


class InvalidObjectIdError(DomainError):
    """An aggregate object ID cannot be decomposed into type and identity."""


class UnreadablePropertyError(DomainError):
    """A property path cannot be read on the given object."""

    def __init__(self, path: str, segment: str) -> None:
        super().__init__(f"Property path '{path}' is not readable at '{segment}'")
        self.path = path
        self.segment = segment


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(IndexSyncError):
    """Base class for infrastructure/system errors."""


class BackendError(InfrastructureError):
    """The remote search backend failed or rejected a request."""

    def __init__(self, message: str, index_name: str | None = None) -> None:
        super().__init__(message)
        self.index_name = index_name


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
