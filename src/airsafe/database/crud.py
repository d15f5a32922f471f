"""Identifier handling and generic row insertion.

These helpers do *not* open or close connections, and they do not commit;
callers provide a connection and manage transaction boundaries.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from collections.abc import Mapping
from typing import Any

from . import queries

from .errors import InvalidIdentifierError

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def validate_identifier(name: str) -> str:
    """Validate a SQL identifier to prevent injection.

    Identifiers must start with an ASCII letter or underscore and contain
    only ASCII letters, digits, and underscores.

    Args:
        name: SQL identifier (table or column name) to validate.

    Returns:
        The identifier, unchanged.

    Raises:
        InvalidIdentifierError: If identifier contains unsafe characters.
    """
    if not isinstance(name, str) or _IDENTIFIER_RE.fullmatch(name) is None:
        msg = f"Unsafe SQL identifier: {name!r}"
        raise InvalidIdentifierError(msg)
    return name


def quote_identifier(name: str) -> str:
    """Validate an identifier and return it double-quoted for SQL text."""
    return f'"{validate_identifier(name)}"'


def insert(
    conn: sqlite3.Connection,
    table: str,
    data: Mapping[str, Any],
) -> int:
    """Insert a single record into table and return its rowid.

    Table and column names are validated; values are always bound as
    parameters.

    Args:
        conn: Database connection (caller manages transaction).
        table: Table name to insert into.
        data: Column name to value mapping for the new record.

    Returns:
        The rowid SQLite assigned to the new row.

    Raises:
        InvalidIdentifierError: If table or column names are invalid.
        IntegrityError: If constraint violation occurs.
        StorageError: If the insert is rejected (e.g. table missing).
    """
    columns = ", ".join(quote_identifier(col) for col in data)
    placeholders = ", ".join("?" for _ in data)
    sql = f"INSERT INTO {quote_identifier(table)} ({columns}) VALUES ({placeholders})"  # noqa: S608

    cursor = queries.execute_query(conn, sql, tuple(data.values()))
    logger.debug("Inserted record into %s", table)
    return cursor.lastrowid
