"""The incident record: table layout, strict parsing, and positional decoding."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import astuple, dataclass
from typing import Any, Final

from ..database.errors import DecodeError, ParseError

INT32_MIN: Final = -(2**31)
INT32_MAX: Final = 2**31 - 1
INT64_MIN: Final = -(2**63)
INT64_MAX: Final = 2**63 - 1

# Columns written by the loader, in source-file order.
DATA_COLUMNS: Final[tuple[str, ...]] = (
    "airline",
    "avail_seat_km_per_week",
    "incidents_85_99",
    "fatal_accidents_85_99",
    "fatalities_85_99",
    "incidents_00_14",
    "fatal_accidents_00_14",
    "fatalities_00_14",
)
COLUMNS: Final[tuple[str, ...]] = ("id", *DATA_COLUMNS)

# Integer columns and the bounds their values must fit in.
_INTEGER_BOUNDS: Final[dict[str, tuple[int, int]]] = {
    "id": (INT64_MIN, INT64_MAX),
    "avail_seat_km_per_week": (INT64_MIN, INT64_MAX),
    **{name: (INT32_MIN, INT32_MAX) for name in DATA_COLUMNS[2:]},
}

_DISPLAY_LABELS: Final[tuple[str, ...]] = (
    "ID",
    "Airline",
    "Available Seat-Km",
    "Incidents 85-99",
    "Fatal Accidents 85-99",
    "Fatalities 85-99",
    "Incidents 00-14",
    "Fatal Accidents 00-14",
    "Fatalities 00-14",
)

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

TABLE_DDL_COLUMNS: Final = """
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    airline TEXT NOT NULL,
    avail_seat_km_per_week INTEGER NOT NULL,
    incidents_85_99 INTEGER NOT NULL,
    fatal_accidents_85_99 INTEGER NOT NULL,
    fatalities_85_99 INTEGER NOT NULL,
    incidents_00_14 INTEGER NOT NULL,
    fatal_accidents_00_14 INTEGER NOT NULL,
    fatalities_00_14 INTEGER NOT NULL
"""


@dataclass(frozen=True)
class IncidentRecord:
    """One row of airline safety statistics.

    `id` is None until the row has been stored.
    """

    airline: str
    avail_seat_km_per_week: int
    incidents_85_99: int
    fatal_accidents_85_99: int
    fatalities_85_99: int
    incidents_00_14: int
    fatal_accidents_00_14: int
    fatalities_00_14: int
    id: int | None = None

    @classmethod
    def from_fields(
        cls,
        fields: Sequence[str],
        *,
        record_number: int,
        line_number: int | None = None,
    ) -> IncidentRecord:
        """Build a record from the 8 text fields of a source record.

        Field 0 is taken verbatim as the airline. Fields 1-7 must be plain
        base-10 integers: an optional sign followed by ASCII digits, with no
        surrounding whitespace or separators. Field 1 must fit in 64 bits,
        the others in 32 bits.

        Args:
            fields: The tokenized record.
            record_number: 1-based position of the record, for diagnostics.
            line_number: Source line number, for diagnostics.

        Returns:
            A record without an id.

        Raises:
            ParseError: If the field count is wrong or an integer field does
                not parse or is out of range.
        """
        if len(fields) != len(DATA_COLUMNS):
            msg = f"expected {len(DATA_COLUMNS)} fields, found {len(fields)}"
            raise ParseError(msg, record_number=record_number, line_number=line_number)

        values: dict[str, Any] = {"airline": fields[0]}
        for name, raw in zip(DATA_COLUMNS[1:], fields[1:]):
            values[name] = _parse_int(
                raw, name, record_number=record_number, line_number=line_number
            )
        return cls(**values)

    @classmethod
    def from_row(cls, row: Sequence[Any], *, row_number: int) -> IncidentRecord:
        """Decode a result row positionally into a record.

        Columns are read by index in table order: id, airline, then the
        seven integer columns. Extra trailing columns are ignored.

        Args:
            row: A result row (sqlite3.Row or plain tuple).
            row_number: 1-based position in the result set, for diagnostics.

        Returns:
            The decoded record.

        Raises:
            DecodeError: If a column is missing, NULL, of the wrong type, or
                out of range for its integer width.
        """
        values: dict[str, Any] = {}
        for index, name in enumerate(COLUMNS):
            if index >= len(row):
                msg = f"missing column '{name}' (result has {len(row)} columns)"
                raise DecodeError(msg, row_number=row_number, column=index)
            value = row[index]
            if name == "airline":
                if not isinstance(value, str):
                    msg = f"expected text for '{name}', got {_type_name(value)}"
                    raise DecodeError(msg, row_number=row_number, column=index)
            else:
                if not isinstance(value, int) or isinstance(value, bool):
                    msg = f"expected integer for '{name}', got {_type_name(value)}"
                    raise DecodeError(msg, row_number=row_number, column=index)
                low, high = _INTEGER_BOUNDS[name]
                if not low <= value <= high:
                    msg = f"value {value} out of range for '{name}'"
                    raise DecodeError(msg, row_number=row_number, column=index)
            values[name] = value
        return cls(**values)

    def to_params(self) -> dict[str, Any]:
        """Return the insertable columns mapped to their values."""
        return {name: getattr(self, name) for name in DATA_COLUMNS}

    def as_row(self) -> tuple[Any, ...]:
        """Return the record as a tuple in table column order."""
        *data, record_id = astuple(self)
        return (record_id, *data)


def format_record(record: IncidentRecord) -> str:
    """Render a record as a single display line containing every field."""
    return ", ".join(
        f"{label}: {value}" for label, value in zip(_DISPLAY_LABELS, record.as_row())
    )


def _parse_int(
    raw: str,
    name: str,
    *,
    record_number: int,
    line_number: int | None,
) -> int:
    if _DECIMAL_RE.fullmatch(raw) is None:
        msg = f"invalid integer for '{name}': {raw!r}"
        raise ParseError(
            msg, record_number=record_number, field=name, value=raw, line_number=line_number
        )
    value = int(raw)
    low, high = _INTEGER_BOUNDS[name]
    if not low <= value <= high:
        msg = f"integer out of range for '{name}': {raw!r}"
        raise ParseError(
            msg, record_number=record_number, field=name, value=raw, line_number=line_number
        )
    return value


def _type_name(value: Any) -> str:
    return "NULL" if value is None else type(value).__name__
