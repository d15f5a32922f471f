"""CLI commands for incident tables: create, query, delete, load."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from ...database import open_database
from ...incidents import create_table, drop_table, execute, load_csv
from ..base import BaseCLI

DbPathOption = Annotated[
    Path | None,
    typer.Option(
        "--db-path",
        help="Path to SQLite database file (defaults to $AIRSAFE_DB_PATH or ./airline_database.db)",
    ),
]


class IncidentsCLI(BaseCLI):
    """CLI helpers for incident table operations.

    Each operation opens the database, runs, and closes it again, so one
    invocation owns exactly one connection.
    """

    def __init__(self) -> None:
        super().__init__("incidents")

    def create(self, *, table_name: str, db_path: Path | None) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="create",
            op_callable=lambda: self._create_operation(table_name=table_name, db_path=db_path),
            pre_message=f"Creating Table '{table_name}'",
        )

    def query(self, *, query_text: str, raw: bool, db_path: Path | None) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="query",
            op_callable=lambda: self._query_operation(
                query_text=query_text, raw=raw, db_path=db_path
            ),
            pre_message=f"Executing Query: {query_text}",
        )

    def drop(self, *, table_name: str, db_path: Path | None) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="delete",
            op_callable=lambda: self._drop_operation(table_name=table_name, db_path=db_path),
            pre_message=f"Dropping Table '{table_name}'",
        )

    def load(
        self,
        *,
        table_name: str,
        file_path: Path,
        skip_header: bool,
        atomic: bool,
        db_path: Path | None,
    ) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="load",
            op_callable=lambda: self._load_operation(
                table_name=table_name,
                file_path=file_path,
                skip_header=skip_header,
                atomic=atomic,
                db_path=db_path,
            ),
            pre_message=f"Loading data into table '{table_name}' from '{file_path}'",
        )

    def _create_operation(self, *, table_name: str, db_path: Path | None) -> dict[str, Any]:
        with open_database(db_path) as conn:
            return create_table(conn, table_name)

    def _drop_operation(self, *, table_name: str, db_path: Path | None) -> dict[str, Any]:
        with open_database(db_path) as conn:
            return drop_table(conn, table_name)

    def _query_operation(
        self, *, query_text: str, raw: bool, db_path: Path | None
    ) -> dict[str, Any]:
        """Run the query and convert the QueryResult to a standardized dict."""
        with open_database(db_path) as conn:
            result = execute(conn, query_text, raw=raw)
        return {"success": True, "rows": result.lines(), "row_count": len(result)}

    def _load_operation(
        self,
        *,
        table_name: str,
        file_path: Path,
        skip_header: bool,
        atomic: bool,
        db_path: Path | None,
    ) -> dict[str, Any]:
        with open_database(db_path) as conn:
            return load_csv(
                conn, table_name, file_path, skip_header=skip_header, atomic=atomic
            )


cli = IncidentsCLI()


def create_command(
    table_name: Annotated[str, typer.Argument(help="Name of the table to create")],
    db_path: DbPathOption = None,
) -> None:
    """Create a new table with the airline incident schema.

    Does nothing if the table already exists.
    """
    cli.create(table_name=table_name, db_path=db_path)


def query_command(
    query: Annotated[str, typer.Argument(help="SQL query to run verbatim")],
    raw: Annotated[
        bool,
        typer.Option(
            "--raw",
            "-r",
            help="Print rows as returned instead of decoding them as incident records",
        ),
    ] = False,
    db_path: DbPathOption = None,
) -> None:
    """Execute a query and print one line per result row.

    Rows are decoded as incident records (id, airline, seven counts) unless
    --raw is given; use --raw for aggregates such as COUNT(*).
    """
    cli.query(query_text=query, raw=raw, db_path=db_path)


def delete_command(
    table_name: Annotated[str, typer.Argument(help="Name of the table to drop")],
    db_path: DbPathOption = None,
) -> None:
    """Drop an existing table.

    Does nothing if the table does not exist.
    """
    cli.drop(table_name=table_name, db_path=db_path)


def load_command(
    table_name: Annotated[str, typer.Argument(help="Destination table")],
    file_path: Annotated[Path, typer.Argument(help="CSV file with 8 fields per record")],
    skip_header: Annotated[
        bool,
        typer.Option("--skip-header", help="Treat the first record as a header and skip it"),
    ] = False,
    atomic: Annotated[
        bool,
        typer.Option(
            "--atomic",
            help="Load the whole file in one transaction; keep nothing if any record fails",
        ),
    ] = False,
    db_path: DbPathOption = None,
) -> None:
    """Load data from a CSV file into the table.

    Records are committed one by one unless --atomic is given: when a record
    fails, the records before it stay in the table and loading stops.
    """
    cli.load(
        table_name=table_name,
        file_path=file_path,
        skip_header=skip_header,
        atomic=atomic,
        db_path=db_path,
    )
