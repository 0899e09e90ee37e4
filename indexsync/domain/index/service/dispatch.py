"""BatchDispatcher - sends records to the backend in bounded groups."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from itertools import batched
from typing import Any, TypeVar

from indexsync.domain.index.model.document import SearchableDocument
from indexsync.domain.shared.error import BackendError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DocumentBuilder = Callable[[Any], SearchableDocument]
BatchOperation = Callable[[list[SearchableDocument]], Awaitable[T]]


class BatchDispatcher:
    """Partitions records into groups of at most ``batch_size`` and dispatches them.

    Groups are sent one after the other, in input order. A failing group
    aborts the remaining ones; groups already sent stay sent.
    """

    def __init__(self, batch_size: int) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def dispatch(
        self,
        records: Sequence[Any],
        build_document: DocumentBuilder,
        operation: BatchOperation[T],
    ) -> list[T]:
        """Run ``operation`` once per group of documents.

        Args:
            records: Records to send, in order.
            build_document: Turns one record into a SearchableDocument.
            operation: Remote call receiving one group of documents.

        Returns:
            One operation result per group, in dispatch order. Empty when
            there are no records.

        Raises:
            BackendError: If the operation fails for a group.
        """
        results: list[T] = []
        groups = list(batched(records, self._batch_size))

        for number, group in enumerate(groups, 1):
            documents = [build_document(record) for record in group]
            logger.debug(f"Dispatching group {number}/{len(groups)} ({len(documents)} documents)")

            try:
                results.append(await operation(documents))
            except BackendError as e:
                logger.error(
                    f"Group {number}/{len(groups)} failed, "
                    f"{len(groups) - number} group(s) not sent: {e.message}"
                )
                raise
            except Exception as e:
                object_ids = [document.object_id for document in documents]
                error_context = (
                    f"Group {number}/{len(groups)} failed for {len(documents)} documents. "
                    f"Objects: {object_ids[:3]}{'...' if len(object_ids) > 3 else ''}. "
                    f"Error: {e}"
                )
                logger.error(error_context)
                raise BackendError(error_context) from e

        return results
