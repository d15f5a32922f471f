"""Incident table operations: schema management, CSV loading, and queries."""

from .load import load_csv
from .query import QueryResult, execute
from .records import COLUMNS, DATA_COLUMNS, IncidentRecord, format_record
from .schema import create_table, drop_table, table_exists

__all__ = [
    "COLUMNS",
    "DATA_COLUMNS",
    "IncidentRecord",
    "QueryResult",
    "create_table",
    "drop_table",
    "execute",
    "format_record",
    "load_csv",
    "table_exists",
]
