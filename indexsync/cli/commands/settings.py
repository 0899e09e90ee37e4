"""Index settings commands."""

import cyclopts
from dishka import AsyncContainer

from indexsync.cli.console import get_console
from indexsync.cli.util import run_with_container
from indexsync.infrastructure.settings.manager import SettingsManager

app = cyclopts.App(name="settings", help="Back up and restore index settings")


@app.command
def backup(indices: list[str] | None = None) -> None:
    """Save index settings from the backend to the settings directory.

    Args:
        indices: Index names to back up (default: all configured indices).
    """

    async def _backup(uow: AsyncContainer) -> list[str]:
        manager = await uow.get(SettingsManager)
        return await manager.backup(indices)

    _report(run_with_container(_backup))


@app.command
def push(indices: list[str] | None = None) -> None:
    """Send saved index settings from the settings directory to the backend.

    Args:
        indices: Index names to push (default: all configured indices).
    """

    async def _push(uow: AsyncContainer) -> list[str]:
        manager = await uow.get(SettingsManager)
        return await manager.push(indices)

    _report(run_with_container(_push))


def _report(messages: list[str]) -> None:
    console = get_console()
    if not messages:
        console.warning("No index settings were processed")
    for message in messages:
        console.success(message)
