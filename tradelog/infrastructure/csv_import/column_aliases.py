"""
Column alias dictionary and header detection.

Broker exports name the same field in many ways. Detection runs in two
passes per field: an exact header match on any alias first, then the
case-insensitive substring match in either direction.
"""

import re

from tradelog.core.enums import MappingField
from tradelog.core.exceptions.journal import MappingIncompleteError, MissingColumnError
from tradelog.core.models.column_mapping import UNMAPPED, ColumnMapping

COLUMN_ALIASES: dict[MappingField, tuple[str, ...]] = {
    MappingField.SYMBOL: ("Symbol", "Instrument", "Pair", "ContractName", "Contract"),
    MappingField.SIDE: ("Side", "Type", "Direction", "Action"),
    MappingField.OPEN_PRICE: ("Open Price", "Entry Price", "Open", "Entry", "EntryPrice"),
    MappingField.CLOSE_PRICE: ("Close Price", "Exit Price", "Close", "Exit", "ExitPrice"),
    MappingField.QUANTITY: ("Lots", "Volume", "Size", "Quantity", "Units"),
    MappingField.PNL: ("PnL", "Profit", "P&L", "Gain", "Net P/L"),
    MappingField.OPEN_TIME: (
        "Open Time",
        "Entry Time",
        "Date",
        "Time",
        "Open Date",
        "EnteredAt",
        "TradeDay",
    ),
    MappingField.CLOSE_TIME: ("Close Time", "Exit Time", "Close Date", "ExitedAt"),
}

# Headers that hold only a clock time, paired with a date-only open column
TIME_ONLY_HEADERS = ("time", "opentime", "entrytime")

_SEPARATORS = re.compile(r"[\s_\-]+")


def _compact(text: str) -> str:
    return _SEPARATORS.sub("", text.strip().lower())


def find_column_index(headers: list[str], aliases: tuple[str, ...]) -> int:
    """
    Find the column of a field among headers.

    Args:
        headers: Header cells of the file
        aliases: Accepted names for the field, in priority order

    Returns:
        Column index, or -1 when no alias matches
    """
    compact_headers = [_compact(header) for header in headers]

    for alias in aliases:
        wanted = _compact(alias)
        for index, header in enumerate(compact_headers):
            if header and header == wanted:
                return index

    for alias in aliases:
        alias_lower = alias.lower()
        for index, header in enumerate(headers):
            header_lower = header.strip().lower()
            if not header_lower:
                continue
            if alias_lower in header_lower or header_lower in alias_lower:
                return index

    return UNMAPPED


def guess_mapping(headers: list[str]) -> ColumnMapping:
    """Best-guess assignment of every field; unmatched fields get -1."""
    return ColumnMapping(
        {field: find_column_index(headers, aliases) for field, aliases in COLUMN_ALIASES.items()}
    )


def detect_columns(headers: list[str]) -> ColumnMapping:
    """Detect the column of every field.

    Raises:
        MissingColumnError: If a required field has no matching column
    """
    mapping = guess_mapping(headers)
    missing = mapping.missing_required()
    if missing:
        raise MissingColumnError([field.value for field in missing], headers)
    return mapping


def validate_mapping(mapping: ColumnMapping, column_count: int | None = None) -> ColumnMapping:
    """Check that a mapping is usable for parsing.

    Raises:
        MappingIncompleteError: If a required field is unmapped, or a field
            points past the last column
    """
    missing = mapping.missing_required()
    if missing:
        raise MappingIncompleteError([field.value for field in missing])

    if column_count is not None:
        out_of_range = mapping.out_of_range(column_count)
        if out_of_range:
            raise MappingIncompleteError(
                [field.value for field in out_of_range], reason="Mapped columns do not exist"
            )
    return mapping


def find_time_companion(headers: list[str], date_index: int) -> int:
    """
    Find a separate clock-time column for a date-only open column.

    Exports like ``Date,Time,...`` split the open timestamp in two. When the
    open column is date-only, a distinct time-only header completes it.

    Returns:
        Index of the time column, or -1
    """
    if date_index < 0 or "time" in _compact(headers[date_index]):
        return UNMAPPED

    for index, header in enumerate(headers):
        if index != date_index and _compact(header) in TIME_ONLY_HEADERS:
            return index
    return UNMAPPED
