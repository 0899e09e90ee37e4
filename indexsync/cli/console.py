"""Console output for the CLI.

All command output goes through the Console below so that messages, errors
and summaries look the same in every command.
"""

from collections.abc import Mapping

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.status import Status
from rich.table import Table


class Console:
    """rich-backed output for indexsync commands.

    Results go to stdout, errors to stderr.
    """

    def __init__(self, *, force_terminal: bool | None = None) -> None:
        self._out = RichConsole(force_terminal=force_terminal)
        self._err = RichConsole(force_terminal=force_terminal, stderr=True)

    def success(self, message: str) -> None:
        self._out.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        self._out.print(f"[yellow]⚠[/yellow] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error, with an optional dimmed hint line below it."""
        self._err.print(f"[red]✗[/red] {escape(message)}")
        if hint:
            self._err.print(f"  [dim]{escape(hint)}[/dim]")

    def counts(self, counts: Mapping[str, int], *, title: str, label: str) -> None:
        """Print a two-column table of names and record counts, with a total row.

        Args:
            counts: Record count per name, printed in mapping order.
            title: Table title.
            label: Header of the name column.
        """
        table = Table(title=title, show_header=True, header_style="bold", show_footer=True)
        table.add_column(label, footer="Total")
        table.add_column("Records", justify="right", footer=str(sum(counts.values())))
        for name, count in counts.items():
            table.add_row(name, str(count))
        self._out.print(table)

    def status(self, message: str) -> Status:
        """Spinner shown while a long-running command works."""
        return self._out.status(message)


_default: Console | None = None


def get_console() -> Console:
    """Get the shared console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
