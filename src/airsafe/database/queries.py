"""Basic query execution helpers.

These wrap low-level sqlite3 operations with logging and translate engine
failures into project-level StorageError.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from .errors import from_sqlite_error

logger = logging.getLogger(__name__)


def execute_query(
    conn: sqlite3.Connection,
    sql: str,
    params: tuple | dict | None = None,
) -> sqlite3.Cursor:
    """Execute a SQL statement and return the cursor.

    Args:
        conn: Database connection.
        sql: SQL statement text.
        params: Statement parameters (tuple or dict). Defaults to empty tuple.

    Returns:
        SQLite cursor with query results.

    Raises:
        StorageError: If SQLite rejects the statement.

    Logs:
        - DEBUG: "Executed query: {sql[:80]}" on success.
        - ERROR: "Query execution failed: {exc}" with exception details on failure.
    """
    try:
        cursor = conn.execute(sql, params or ())
        logger.debug("Executed query: %s", sql[:80])
        return cursor
    except sqlite3.Error as exc:
        logger.exception("Query execution failed: %s", exc)
        raise from_sqlite_error(exc) from exc


def fetch_one(
    conn: sqlite3.Connection,
    sql: str,
    params: tuple | dict | None = None,
) -> dict[str, Any] | None:
    """Execute query and return single row as dict, or None if no results."""
    cursor = execute_query(conn, sql, params)
    row = cursor.fetchone()
    if row is None:
        return None
    return dict(row)


def execute_update(
    conn: sqlite3.Connection,
    sql: str,
    params: tuple | dict | None = None,
) -> int:
    """Execute INSERT/UPDATE/DELETE/DDL and return number of affected rows.

    Logs:
        - DEBUG: "Update affected {rowcount} rows" on success.
    """
    cursor = execute_query(conn, sql, params)
    rowcount = cursor.rowcount
    logger.debug("Update affected %s rows", rowcount)
    return rowcount
