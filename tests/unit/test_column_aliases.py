"""
Unit tests for column detection.
"""

import pytest

from tradelog.core.enums import MappingField
from tradelog.core.exceptions.journal import MappingIncompleteError, MissingColumnError
from tradelog.core.models.column_mapping import UNMAPPED, ColumnMapping
from tradelog.infrastructure.csv_import.column_aliases import (
    COLUMN_ALIASES,
    detect_columns,
    find_column_index,
    find_time_companion,
    guess_mapping,
    validate_mapping,
)

STANDARD_HEADERS = [
    "Symbol",
    "Side",
    "Open Price",
    "Close Price",
    "Lots",
    "Profit",
    "Open Time",
    "Close Time",
]


class TestFindColumnIndex:
    """Tests for single-field lookup."""

    def test_should_prefer_exact_match_over_substring(self) -> None:
        """Test an exact 'Open' header beats a substring hit on 'Open Time'."""
        headers = ["Open Time", "Open"]
        assert find_column_index(headers, COLUMN_ALIASES[MappingField.OPEN_PRICE]) == 1

    def test_should_fall_back_to_substring_match(self) -> None:
        """Test case-insensitive containment."""
        headers = ["Trade Symbol", "Qty"]
        assert find_column_index(headers, COLUMN_ALIASES[MappingField.SYMBOL]) == 0

    def test_should_ignore_case_and_separators_in_exact_pass(self) -> None:
        """Test 'entry_price' matches 'Entry Price' exactly."""
        headers = ["entry_time", "entry_price"]
        assert find_column_index(headers, COLUMN_ALIASES[MappingField.OPEN_PRICE]) == 1

    def test_should_return_unmapped_when_nothing_matches(self) -> None:
        """Test -1 for unknown headers."""
        assert find_column_index(["Foo", "Bar"], COLUMN_ALIASES[MappingField.PNL]) == UNMAPPED

    def test_should_skip_blank_headers(self) -> None:
        """Test empty header cells never match."""
        assert find_column_index(["", "Symbol"], COLUMN_ALIASES[MappingField.SYMBOL]) == 1


class TestDetectColumns:
    """Tests for whole-header detection."""

    def test_should_detect_standard_headers(self) -> None:
        """Test a conventional export maps every field in order."""
        mapping = detect_columns(STANDARD_HEADERS)

        assert mapping.to_dict() == {
            "symbol": 0,
            "side": 1,
            "openPrice": 2,
            "closePrice": 3,
            "quantity": 4,
            "pnl": 5,
            "openTime": 6,
            "closeTime": 7,
        }

    def test_should_detect_platform_style_headers(self) -> None:
        """Test ContractName/EnteredAt style exports."""
        headers = ["ContractName", "Type", "EntryPrice", "ExitPrice", "Size", "PnL", "EnteredAt"]

        mapping = detect_columns(headers)

        assert mapping[MappingField.SYMBOL] == 0
        assert mapping[MappingField.SIDE] == 1
        assert mapping[MappingField.OPEN_PRICE] == 2
        assert mapping[MappingField.CLOSE_PRICE] == 3
        assert mapping[MappingField.OPEN_TIME] == 6

    def test_should_raise_with_missing_fields_and_available_headers(self) -> None:
        """Test unrecognizable headers name the missing fields."""
        headers = ["Ticker", "Dir", "In", "Out", "Qty", "Result"]

        with pytest.raises(MissingColumnError) as exc_info:
            detect_columns(headers)

        assert {"openPrice", "closePrice", "quantity"} <= set(exc_info.value.missing)
        assert exc_info.value.available == headers

    def test_should_guess_partial_mapping_without_raising(self) -> None:
        """Test guess_mapping leaves unmatched fields at -1."""
        mapping = guess_mapping(["Ticker", "Dir", "In", "Out", "Qty", "Result"])

        assert mapping[MappingField.SIDE] == 1
        assert mapping[MappingField.OPEN_PRICE] == UNMAPPED
        assert mapping[MappingField.CLOSE_TIME] == UNMAPPED


class TestValidateMapping:
    """Tests for user mapping validation."""

    def test_should_accept_complete_mapping(self) -> None:
        """Test a full mapping passes unchanged."""
        mapping = ColumnMapping.from_dict(
            {"symbol": 0, "side": 1, "openPrice": 2, "closePrice": 3, "quantity": 4, "pnl": 5}
        )
        assert validate_mapping(mapping, column_count=6) is mapping

    def test_should_reject_unmapped_required_field(self) -> None:
        """Test unmapped required fields are named."""
        mapping = ColumnMapping.from_dict({"symbol": 0, "side": 1})

        with pytest.raises(MappingIncompleteError) as exc_info:
            validate_mapping(mapping)

        assert exc_info.value.unmapped == ["openPrice", "closePrice", "quantity", "pnl"]

    def test_should_reject_index_past_last_column(self) -> None:
        """Test indices beyond the header row are rejected."""
        mapping = ColumnMapping.from_dict(
            {"symbol": 0, "side": 1, "openPrice": 2, "closePrice": 3, "quantity": 4, "pnl": 9}
        )

        with pytest.raises(MappingIncompleteError, match="Mapped columns do not exist: pnl"):
            validate_mapping(mapping, column_count=6)


class TestTimeCompanion:
    """Tests for split date/time columns."""

    def test_should_pair_date_column_with_time_column(self) -> None:
        """Test Date,Time exports."""
        assert find_time_companion(["Date", "Time", "Symbol"], 0) == 1

    def test_should_not_pair_column_that_already_holds_time(self) -> None:
        """Test 'Open Time' needs no companion."""
        assert find_time_companion(["Open Time", "Time"], 0) == UNMAPPED

    def test_should_return_unmapped_for_unmapped_date(self) -> None:
        """Test -1 input."""
        assert find_time_companion(["Date", "Time"], UNMAPPED) == UNMAPPED
