"""Load incident records from a CSV file into a table.

Loading is sequential. By default every record is committed as soon as it
is inserted, so a failure partway through leaves the earlier records in
place; the loader stops at the first failure and never attempts the
records after it. `atomic=True` runs the whole file in one transaction
instead.
"""

from __future__ import annotations

import csv
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path
from typing import Any, TextIO

from ..database.connection import transaction
from ..database.crud import insert, validate_identifier
from ..database.errors import ParseError
from .records import DATA_COLUMNS, IncidentRecord

logger = logging.getLogger(__name__)


def load_csv(
    conn: sqlite3.Connection,
    table_name: str,
    source_path: Path | str,
    *,
    skip_header: bool = False,
    atomic: bool = False,
) -> dict[str, Any]:
    """Append the records of a CSV file to an incident table.

    Each record must have 8 fields: airline, available seat-km per week,
    then the six incident/accident/fatality counts. The first record is
    treated as data unless skip_header is set.

    Args:
        conn: Database connection.
        table_name: Destination table (must already exist).
        source_path: Path of the CSV file to read.
        skip_header: If True, discard the first record.
        atomic: If True, insert everything in one transaction and roll it
            back on any failure. Otherwise commit record by record.

    Returns:
        Result dictionary with success, table, source, rows_inserted and
        message.

    Raises:
        InvalidIdentifierError: If table_name is not a safe identifier.
        OSError: If the source file cannot be opened.
        ParseError: If a record has the wrong shape or a bad integer field.
        StorageError: If an insert is rejected (e.g. the table is missing).

    Logs:
        - INFO: "Loading {path} into {table}" at start.
        - INFO: "Loaded {n} rows from {path} into {table}" on success.
        - ERROR: "Load stopped at record {k}" when a record fails.
    """
    validate_identifier(table_name)
    source = Path(source_path)
    logger.info("Loading %s into %s (atomic=%s)", source, table_name, atomic)

    # Undecodable bytes become lone surrogates so they fail on their own record.
    with source.open("r", encoding="utf-8-sig", errors="surrogateescape", newline="") as handle:
        if atomic:
            with transaction(existing_connection=conn):
                inserted = _insert_records(conn, table_name, handle, skip_header, commit_each=False)
        else:
            inserted = _insert_records(conn, table_name, handle, skip_header, commit_each=True)

    logger.info("Loaded %d rows from %s into %s", inserted, source, table_name)
    return {
        "success": True,
        "table": table_name,
        "source": str(source_path),
        "rows_inserted": inserted,
        "message": f"Data loaded successfully from '{source_path}' into table '{table_name}'.",
    }


def _insert_records(
    conn: sqlite3.Connection,
    table_name: str,
    handle: TextIO,
    skip_header: bool,
    *,
    commit_each: bool,
) -> int:
    inserted = 0
    try:
        for record_number, line_number, fields in _read_records(handle, skip_header):
            record = IncidentRecord.from_fields(
                fields, record_number=record_number, line_number=line_number
            )
            insert(conn, table_name, record.to_params())
            if commit_each:
                conn.commit()
            inserted += 1
    except Exception:
        logger.error(
            "Load stopped at record %d; %d earlier rows %s",
            inserted + 1,
            inserted,
            "kept" if commit_each else "discarded",
        )
        raise
    return inserted


def _read_records(handle: TextIO, skip_header: bool) -> Iterator[tuple[int, int, list[str]]]:
    """Yield (record_number, line_number, fields) for each data record.

    Blank lines are skipped and do not count as records.
    """
    reader = csv.reader(handle)
    record_number = 0
    header_pending = skip_header
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise ParseError(
                f"unreadable record: {exc}",
                record_number=record_number + 1,
                line_number=reader.line_num,
            ) from exc
        if not fields:
            continue
        if header_pending:
            header_pending = False
            continue
        record_number += 1
        _check_decoded(fields, record_number, reader.line_num)
        yield record_number, reader.line_num, fields


def _check_decoded(fields: list[str], record_number: int, line_number: int) -> None:
    for index, value in enumerate(fields):
        if any("\udc80" <= ch <= "\udcff" for ch in value):
            shown = value.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")
            raise ParseError(
                f"invalid UTF-8 in field {index}: {shown!r}",
                record_number=record_number,
                field=DATA_COLUMNS[index] if index < len(DATA_COLUMNS) else None,
                value=shown,
                line_number=line_number,
            )
