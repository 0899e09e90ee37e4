"""Helpers shared by CLI commands."""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

from dishka import AsyncContainer

from indexsync.application.di import create_container
from indexsync.cli.console import get_console
from indexsync.config import configure_logging, load_config
from indexsync.domain.shared.error import IndexSyncError

T = TypeVar("T")


def run_with_container(fn: Callable[[AsyncContainer], Awaitable[T]]) -> T:
    """Load configuration, build the container and run ``fn`` inside one unit of work.

    Exits with status 1 on indexsync errors, invalid configuration included,
    after printing them.
    """

    async def _main() -> T:
        config = load_config()
        configure_logging(config.logging)
        container = create_container(config)
        try:
            async with container() as uow:
                return await fn(uow)
        finally:
            await container.close()

    try:
        return asyncio.run(_main())
    except IndexSyncError as e:
        get_console().error(e.message, hint=f"[{e.code}]")
        sys.exit(1)
