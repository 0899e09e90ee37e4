"""Custom Dishka scopes for indexsync."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Process lifetime (configuration, registries, HTTP client)
    - UOW: One indexing run (database session and everything reading through it)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
