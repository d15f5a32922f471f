"""Project-level exception types."""

from __future__ import annotations

import sqlite3


class AirsafeError(Exception):
    """Base exception for all project errors."""


class StorageError(AirsafeError):
    """Raised when SQLite rejects a statement."""


class IntegrityError(StorageError):
    """Raised when a constraint violation occurs."""


class InvalidIdentifierError(AirsafeError, ValueError):
    """Raised when a table name is not a safe SQL identifier."""


class ParseError(AirsafeError, ValueError):
    """Raised when a source record cannot be coerced into an incident row.

    Attributes:
        record_number: 1-based position of the record among data records.
        field: Name of the offending field, or None for record-level problems
            (wrong field count).
        value: Raw text of the offending field, if any.
        line_number: Source line on which the record ended, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        record_number: int,
        field: str | None = None,
        value: str | None = None,
        line_number: int | None = None,
    ) -> None:
        self.record_number = record_number
        self.field = field
        self.value = value
        self.line_number = line_number
        location = f"record {record_number}"
        if line_number is not None:
            location += f" (line {line_number})"
        super().__init__(f"{location}: {message}")


class DecodeError(AirsafeError):
    """Raised when a result row does not match the incident record shape.

    Attributes:
        row_number: 1-based position of the row in the result set.
        column: 0-based column index that failed to decode.
    """

    def __init__(self, message: str, *, row_number: int, column: int) -> None:
        self.row_number = row_number
        self.column = column
        super().__init__(f"row {row_number}, column {column}: {message}")


def from_sqlite_error(error: sqlite3.Error) -> StorageError:
    """Map a raw sqlite3 error to a project-level StorageError.

    IntegrityError is mapped to IntegrityError, all others to StorageError.

    Args:
        error: SQLite exception to convert.

    Returns:
        StorageError or IntegrityError instance with the engine's message.
    """
    if isinstance(error, sqlite3.IntegrityError):
        return IntegrityError(str(error))
    return StorageError(str(error))
