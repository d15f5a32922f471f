"""Public interface for the database package.

This module exposes the main primitives needed by the rest of the
project: connection helpers, the error taxonomy, and low-level query
and insert utilities.
"""

from .connection import get_connection, open_database, transaction
from .crud import insert, quote_identifier, validate_identifier
from .errors import (
    AirsafeError,
    DecodeError,
    IntegrityError,
    InvalidIdentifierError,
    ParseError,
    StorageError,
)

__all__ = [
    "get_connection",
    "open_database",
    "transaction",
    "insert",
    "quote_identifier",
    "validate_identifier",
    "AirsafeError",
    "DecodeError",
    "IntegrityError",
    "InvalidIdentifierError",
    "ParseError",
    "StorageError",
]
