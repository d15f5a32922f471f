"""Create and drop incident tables."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from ..database import queries
from ..database.crud import quote_identifier, validate_identifier
from .records import TABLE_DDL_COLUMNS

logger = logging.getLogger(__name__)


def create_table(conn: sqlite3.Connection, table_name: str) -> dict[str, Any]:
    """Create an incident table if it does not already exist.

    An existing table of the same name is left untouched, whatever its
    columns.

    Args:
        conn: Database connection.
        table_name: Name of the table to create.

    Returns:
        Result dictionary with success, table and message.

    Raises:
        InvalidIdentifierError: If table_name is not a safe identifier.
        StorageError: If SQLite rejects the statement.

    Logs:
        - INFO: "Created table {name}" on success.
    """
    sql = f"CREATE TABLE IF NOT EXISTS {quote_identifier(table_name)} ({TABLE_DDL_COLUMNS})"
    queries.execute_update(conn, sql)
    conn.commit()
    logger.info("Created table %s", table_name)
    return {
        "success": True,
        "table": table_name,
        "message": f"Table '{table_name}' created successfully.",
    }


def drop_table(conn: sqlite3.Connection, table_name: str) -> dict[str, Any]:
    """Drop a table if it exists.

    Args:
        conn: Database connection.
        table_name: Name of the table to drop.

    Returns:
        Result dictionary with success, table and message.

    Raises:
        InvalidIdentifierError: If table_name is not a safe identifier.
        StorageError: If SQLite rejects the statement.
    """
    sql = f"DROP TABLE IF EXISTS {quote_identifier(table_name)}"
    queries.execute_update(conn, sql)
    conn.commit()
    logger.info("Dropped table %s", table_name)
    return {
        "success": True,
        "table": table_name,
        "message": f"Table '{table_name}' dropped successfully.",
    }


def table_exists(conn: sqlite3.Connection, table_name: str) -> bool:
    """Return True if a table with this name exists."""
    validate_identifier(table_name)
    row = queries.fetch_one(
        conn,
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
        (table_name,),
    )
    return row is not None
