from __future__ import annotations

import logging
from typing import Annotated

import typer

from .base import configure_logging, set_log_level
from .commands.incidents import create_command, delete_command, load_command, query_command

configure_logging()
app = typer.Typer(
    help="Manage airline safety-incident tables in a SQLite database",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)

# Each command is also reachable through a hidden single-letter alias.
for _name, _alias, _command in (
    ("create", "c", create_command),
    ("query", "q", query_command),
    ("delete", "d", delete_command),
    ("load", "l", load_command),
):
    app.command(_name)(_command)
    app.command(_alias, hidden=True)(_command)


@app.callback()
def root(
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Log debug output (executed SQL, connections)"),
    ] = False,
) -> None:
    """Manage airline safety-incident tables in a SQLite database."""
    if verbose:
        set_log_level(logging.DEBUG)


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.

    Side Effects:
        - Processes CLI arguments and executes commands.
        - Exits with code 1 if the operation fails.
    """
    app()


if __name__ == "__main__":
    main()
