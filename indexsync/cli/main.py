"""Main CLI application using Cyclopts."""

import cyclopts

from indexsync.cli.commands import index, settings

app = cyclopts.App(
    name="indexsync",
    help="Keep persisted records in sync with the search index",
)

app.command(index.app, name="index")
app.command(settings.app, name="settings")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
