"""Indexing commands."""

import cyclopts
from dishka import AsyncContainer

from indexsync.cli.console import get_console
from indexsync.cli.util import run_with_container
from indexsync.domain.index.service.importer import RecordImporter
from indexsync.domain.index.service.index import IndexService

app = cyclopts.App(name="index", help="Index maintenance commands")


@app.command(name="import")
def import_records(indices: list[str] | None = None, clear: bool = False) -> None:
    """Index every stored record of the configured indices.

    Args:
        indices: Index names to import (default: all configured indices).
        clear: Clear the indices before importing.
    """
    console = get_console()

    async def _import(uow: AsyncContainer) -> dict[type, int]:
        importer = await uow.get(RecordImporter)
        return await importer.run(indices, clear=clear)

    with console.status("Importing records..."):
        imported = run_with_container(_import)

    console.counts(
        {record_type.__qualname__: count for record_type, count in imported.items()},
        title="Imported",
        label="Record type",
    )
    console.success(f"Imported {sum(imported.values())} records")


@app.command
def clear(indices: list[str] | None = None) -> None:
    """Remove every document from the configured indices.

    Args:
        indices: Index names to clear (default: all configured indices).
    """
    console = get_console()

    async def _clear(uow: AsyncContainer) -> list[str]:
        service = await uow.get(IndexService)
        cleared = []
        for record_type in service.registry.types_for_indices(indices):
            await service.clear(record_type)
            cleared.append(service.full_index_name(record_type))
        return cleared

    for index_name in run_with_container(_clear):
        console.success(f"Cleared {index_name}")
