"""Run ad-hoc read queries and decode the results."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Any

from ..database import queries
from .records import IncidentRecord, format_record

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Rows returned by a query.

    `rows` holds IncidentRecord instances for decoded results and plain
    tuples for raw results.
    """

    query: str
    columns: list[str]
    rows: list[Any] = field(default_factory=list)
    raw: bool = False

    def __len__(self) -> int:
        return len(self.rows)

    def lines(self) -> list[str]:
        """Render one display line per row, containing every field."""
        if not self.raw:
            return [format_record(record) for record in self.rows]
        return [
            ", ".join(f"{name}: {value}" for name, value in zip(self.columns, row))
            for row in self.rows
        ]


def execute(conn: sqlite3.Connection, query_text: str, *, raw: bool = False) -> QueryResult:
    """Run a query verbatim and collect its rows.

    By default every row is decoded positionally into an IncidentRecord,
    so the query must yield the incident column layout (for example
    `SELECT * FROM <table>`). With raw=True rows are returned as tuples,
    whatever their shape. Changes made by a writing statement are committed
    before returning.

    Args:
        conn: Database connection.
        query_text: SQL text, passed to SQLite unchanged.
        raw: If True, skip decoding.

    Returns:
        QueryResult with rows in the order SQLite produced them.

    Raises:
        StorageError: If the query is invalid or references unknown
            tables or columns.
        DecodeError: If a row does not match the incident layout.
    """
    cursor = queries.execute_query(conn, query_text)
    columns = [desc[0] for desc in cursor.description or ()]

    if raw:
        rows: list[Any] = [tuple(row) for row in cursor]
    else:
        rows = [
            IncidentRecord.from_row(row, row_number=number)
            for number, row in enumerate(cursor, start=1)
        ]

    # Statements that write (INSERT/UPDATE/DELETE) leave an implicit transaction open.
    if conn.in_transaction:
        conn.commit()
        logger.debug("Committed changes made by query")

    logger.info("Query returned %d rows", len(rows))
    return QueryResult(query=query_text, columns=columns, rows=rows, raw=raw)
