"""Database connection helpers.

This module provides a small, synchronous API for obtaining the single
SQLite connection a CLI invocation works with, plus scoped helpers that
guarantee the connection is released on every exit path.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from .. import global_config as g

logger = logging.getLogger(__name__)


def _ensure_parent_dir(db_path: Path) -> None:
    """Ensure the parent directory for a database file exists."""
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _configure_connection(conn: sqlite3.Connection) -> None:
    """Apply standard pragmas and row factory to a new connection.

    Args:
        conn: SQLite connection to configure.

    Side Effects:
        - Modifies connection settings (row_factory, pragmas).
    """
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    # Default DELETE journal mode; concurrent invocations rely on SQLite's own locking.


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    Creates the database file (and its parent directory) if it does not
    exist yet.

    Args:
        db_path: Path to SQLite database file. Defaults to
            global_config.default_db_path(). ":memory:" opens an in-memory
            database.

    Returns:
        Configured SQLite connection ready for use.

    Logs:
        - DEBUG: "Opening SQLite database at {path}" when creating connection.
    """
    if db_path == ":memory:":
        logger.debug("Opening in-memory SQLite database")
        conn = sqlite3.connect(":memory:")
        _configure_connection(conn)
        return conn

    resolved = Path(db_path) if db_path is not None else g.default_db_path()
    _ensure_parent_dir(resolved)
    logger.debug("Opening SQLite database at %s", resolved)
    conn = sqlite3.connect(str(resolved))
    _configure_connection(conn)
    return conn


@contextlib.contextmanager
def open_database(db_path: Path | str | None = None) -> Iterator[sqlite3.Connection]:
    """Context manager owning one connection for the length of a block.

    Does not commit or roll back anything itself; operations decide their
    own commit points. The connection is closed however the block exits.

    Args:
        db_path: Path to database file. Defaults to global config.

    Yields:
        SQLite connection.

    Logs:
        - DEBUG: "Connection closed" when the block exits.
    """
    conn = get_connection(db_path=db_path)
    try:
        yield conn
    finally:
        conn.close()
        logger.debug("Connection closed")


@contextlib.contextmanager
def transaction(
    db_path: Path | str | None = None,
    existing_connection: sqlite3.Connection | None = None,
) -> Iterator[sqlite3.Connection]:
    """Context manager for a transactional connection block.

    Manages transaction boundaries (commit on success, rollback on error).
    If an existing connection is provided, it is reused and not closed.
    Otherwise, creates and closes a new connection.

    Args:
        db_path: Path to database file (only used if existing_connection
            is None). Defaults to global config.
        existing_connection: Existing connection to reuse. If None, creates
            a new connection that will be closed on exit.

    Yields:
        SQLite connection ready for database operations.

    Logs:
        - DEBUG: "Beginning transaction" at start
        - DEBUG: "Transaction committed" on success
        - ERROR: "Transaction rolled back due to error" on failure
        - DEBUG: "Connection closed" when closing owned connection.
    """
    owns_connection = existing_connection is None
    conn = existing_connection or get_connection(db_path=db_path)

    try:
        logger.debug("Beginning transaction")
        yield conn
        conn.commit()
        logger.debug("Transaction committed")
    except Exception:
        logger.exception("Transaction rolled back due to error")
        conn.rollback()
        raise
    finally:
        if owns_connection:
            conn.close()
            logger.debug("Connection closed")
