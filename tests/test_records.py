"""Tests for incident record parsing, decoding, and formatting."""

from __future__ import annotations

import pytest

from airsafe.database import DecodeError, ParseError
from airsafe.incidents import IncidentRecord, format_record

VALID_FIELDS = ["Air A", "1000000", "1", "0", "0", "0", "0", "0"]


class TestFromFields:
    """Tests for IncidentRecord.from_fields."""

    @pytest.mark.unit
    def test_parses_valid_record(self) -> None:
        record = IncidentRecord.from_fields(
            ["Aer Lingus", "320906734", "2", "0", "0", "0", "0", "0"], record_number=1
        )
        assert record.airline == "Aer Lingus"
        assert record.avail_seat_km_per_week == 320906734
        assert record.incidents_85_99 == 2
        assert record.id is None

    @pytest.mark.unit
    def test_airline_is_taken_verbatim(self) -> None:
        record = IncidentRecord.from_fields(
            ["  Air, Inc.* ", "1", "0", "0", "0", "0", "0", "0"], record_number=1
        )
        assert record.airline == "  Air, Inc.* "

    @pytest.mark.unit
    def test_accepts_signs(self) -> None:
        record = IncidentRecord.from_fields(
            ["X", "+5", "-3", "0", "0", "0", "0", "0"], record_number=1
        )
        assert record.avail_seat_km_per_week == 5
        assert record.incidents_85_99 == -3

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["bad", " 1", "1 ", "1_000", "1,000", "1.0", "", "٣"])
    def test_rejects_non_strict_integers(self, raw: str) -> None:
        fields = ["X", "1", raw, "0", "0", "0", "0", "0"]
        with pytest.raises(ParseError) as excinfo:
            IncidentRecord.from_fields(fields, record_number=4, line_number=5)
        err = excinfo.value
        assert err.record_number == 4
        assert err.line_number == 5
        assert err.field == "incidents_85_99"
        assert err.value == raw
        assert "record 4" in str(err)

    @pytest.mark.unit
    def test_seat_km_allows_64_bit(self) -> None:
        big = str(2**63 - 1)
        record = IncidentRecord.from_fields(["X", big, "0", "0", "0", "0", "0", "0"], record_number=1)
        assert record.avail_seat_km_per_week == 2**63 - 1

    @pytest.mark.unit
    def test_seat_km_overflow(self) -> None:
        with pytest.raises(ParseError, match="out of range"):
            IncidentRecord.from_fields(
                ["X", str(2**63), "0", "0", "0", "0", "0", "0"], record_number=1
            )

    @pytest.mark.unit
    def test_counts_limited_to_32_bit(self) -> None:
        fields = ["X", "1", "0", "0", "0", "0", "0", str(2**31)]
        with pytest.raises(ParseError) as excinfo:
            IncidentRecord.from_fields(fields, record_number=2)
        assert excinfo.value.field == "fatalities_00_14"

    @pytest.mark.unit
    @pytest.mark.parametrize("count", [7, 9])
    def test_wrong_field_count(self, count: int) -> None:
        fields = (VALID_FIELDS + ["0"])[:count]
        with pytest.raises(ParseError, match=f"expected 8 fields, found {count}") as excinfo:
            IncidentRecord.from_fields(fields, record_number=3)
        assert excinfo.value.field is None


class TestFromRow:
    """Tests for IncidentRecord.from_row positional decoding."""

    @pytest.mark.unit
    def test_decodes_row(self) -> None:
        record = IncidentRecord.from_row((7, "Air B", 2000000, 2, 1, 5, 0, 0, 0), row_number=1)
        assert record.id == 7
        assert record.airline == "Air B"
        assert record.fatalities_85_99 == 5

    @pytest.mark.unit
    def test_ignores_extra_columns(self) -> None:
        record = IncidentRecord.from_row((1, "A", 1, 0, 0, 0, 0, 0, 0, "extra"), row_number=1)
        assert record.as_row() == (1, "A", 1, 0, 0, 0, 0, 0, 0)

    @pytest.mark.unit
    def test_missing_column(self) -> None:
        with pytest.raises(DecodeError) as excinfo:
            IncidentRecord.from_row((0,), row_number=1)
        assert excinfo.value.column == 1
        assert excinfo.value.row_number == 1

    @pytest.mark.unit
    def test_wrong_type(self) -> None:
        with pytest.raises(DecodeError, match="expected integer") as excinfo:
            IncidentRecord.from_row((1, "A", "lots", 0, 0, 0, 0, 0, 0), row_number=2)
        assert excinfo.value.column == 2

    @pytest.mark.unit
    def test_null_value(self) -> None:
        with pytest.raises(DecodeError, match="NULL"):
            IncidentRecord.from_row((1, None, 1, 0, 0, 0, 0, 0, 0), row_number=1)

    @pytest.mark.unit
    def test_count_out_of_32_bit_range(self) -> None:
        with pytest.raises(DecodeError, match="out of range"):
            IncidentRecord.from_row((1, "A", 1, 2**31, 0, 0, 0, 0, 0), row_number=1)


@pytest.mark.unit
def test_format_record_contains_every_field() -> None:
    record = IncidentRecord.from_row((1, "Air A", 1000000, 1, 2, 3, 4, 5, 6), row_number=1)
    assert format_record(record) == (
        "ID: 1, Airline: Air A, Available Seat-Km: 1000000, Incidents 85-99: 1, "
        "Fatal Accidents 85-99: 2, Fatalities 85-99: 3, Incidents 00-14: 4, "
        "Fatal Accidents 00-14: 5, Fatalities 00-14: 6"
    )


@pytest.mark.unit
def test_to_params_matches_insert_columns() -> None:
    record = IncidentRecord.from_fields(VALID_FIELDS, record_number=1)
    assert list(record.to_params()) == [
        "airline",
        "avail_seat_km_per_week",
        "incidents_85_99",
        "fatal_accidents_85_99",
        "fatalities_85_99",
        "incidents_00_14",
        "fatal_accidents_00_14",
        "fatalities_00_14",
    ]
