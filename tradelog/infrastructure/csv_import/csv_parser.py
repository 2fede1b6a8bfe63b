"""
Broker CSV parser.

Reads CSV text with pandas, detects the trade columns from the header row
and hands every data row to the normalizer. Row failures are collected in
the result; only column detection, or a file without a single usable row,
fails the parse as a whole.
"""

import io

import pandas as pd
from loguru import logger

from tradelog.core.enums import MappingField
from tradelog.core.exceptions.journal import MissingColumnError, RowParseError
from tradelog.core.models.candidate import RawRow, TradeCandidate
from tradelog.core.models.column_mapping import ColumnMapping
from tradelog.core.models.import_result import DateRange, ParseResult, ParseSummary

from .column_aliases import detect_columns, find_time_companion, validate_mapping
from .normalizer import TradeCandidateNormalizer

# Cells are kept as raw text; the normalizer does every conversion
_READ_OPTIONS = {
    "header": None,
    "dtype": str,
    "keep_default_na": False,
    "skipinitialspace": True,
    "engine": "python",
}

HEADER_ROW_REQUIRED = "CSV file must contain at least a header row and one data row"
NO_VALID_TRADES = "No valid trades were parsed from the CSV file"


def read_rows(content: str) -> list[RawRow]:
    """
    Split CSV text into rows of cell strings.

    The first line fixes the column count. Longer lines are cut to it, and
    shorter lines keep only the cells they actually have.

    Raises:
        pandas.errors.EmptyDataError: If the text holds no columns
        pandas.errors.ParserError: If the text is not parseable as CSV
    """
    width = pd.read_csv(io.StringIO(content), nrows=1, **_READ_OPTIONS).shape[1]
    frame = pd.read_csv(
        io.StringIO(content),
        on_bad_lines=lambda fields: fields[:width],
        **_READ_OPTIONS,
    )

    rows: list[RawRow] = []
    for record in frame.itertuples(index=False, name=None):
        cells: RawRow = []
        for cell in record:
            # pandas pads short lines with NaN
            if not isinstance(cell, str):
                break
            cells.append(cell)
        rows.append(cells)
    return rows


def date_range(candidates: list[TradeCandidate]) -> DateRange | None:
    """Earliest and latest entry dates of the parsed candidates."""
    if not candidates:
        return None
    dates = [candidate.entry_time.date() for candidate in candidates]
    return DateRange(earliest=min(dates), latest=max(dates))


class TradeCSVParser:
    """Parses broker trade history exports into trade candidates."""

    def __init__(self, normalizer: TradeCandidateNormalizer | None = None) -> None:
        self.normalizer = normalizer or TradeCandidateNormalizer()

    def parse(self, content: str) -> ParseResult:
        """
        Parse CSV text, detecting the columns from the header row.

        Args:
            content: CSV text with a header row

        Returns:
            ParseResult; when detection fails ``missing_columns`` lists the
            unmatched fields and the caller should ask for a mapping
        """
        rows, failure = self._read(content)
        if failure is not None:
            return failure

        headers = [header.strip() for header in rows[0]]
        try:
            mapping = detect_columns(headers)
        except MissingColumnError as e:
            logger.warning(f"Column detection failed: {e}")
            return ParseResult(
                success=False,
                errors=[str(e), f"Available columns: {', '.join(headers)}"],
                headers=headers,
                missing_columns=e.missing,
                summary=ParseSummary(total_rows=len(rows) - 1),
            )

        logger.debug(f"Detected columns: {mapping.to_dict()}")
        return self._parse_rows(headers, rows[1:], mapping)

    def parse_with_mappings(self, content: str, mapping: ColumnMapping) -> ParseResult:
        """
        Parse CSV text with an explicit column mapping, skipping detection.

        Raises:
            MappingIncompleteError: If the mapping leaves a required field
                unmapped or points past the header row
        """
        rows, failure = self._read(content)
        if failure is not None:
            return failure

        headers = [header.strip() for header in rows[0]]
        validate_mapping(mapping, len(headers))
        return self._parse_rows(headers, rows[1:], mapping)

    def _read(self, content: str) -> tuple[list[RawRow], ParseResult | None]:
        try:
            rows = read_rows(content)
        except pd.errors.EmptyDataError:
            return [], ParseResult(errors=[HEADER_ROW_REQUIRED])
        except (pd.errors.ParserError, ValueError) as e:
            logger.error(f"CSV parsing error: {e}")
            return [], ParseResult(errors=[f"General parsing error: {e}"])

        if len(rows) < 2:
            headers = [header.strip() for header in rows[0]] if rows else []
            return rows, ParseResult(errors=[HEADER_ROW_REQUIRED], headers=headers)
        return rows, None

    def _parse_rows(
        self, headers: list[str], data_rows: list[RawRow], mapping: ColumnMapping
    ) -> ParseResult:
        time_index = find_time_companion(headers, mapping[MappingField.OPEN_TIME])
        candidates: list[TradeCandidate] = []
        errors: list[str] = []

        for offset, row in enumerate(data_rows):
            # Header is line 1
            row_number = offset + 2
            if len(row) < len(headers):
                errors.append(
                    f"Row {row_number}: Insufficient columns "
                    f"({len(row)} vs {len(headers)} expected)"
                )
                continue
            try:
                candidates.append(self.normalizer.normalize(row, mapping, row_number, time_index))
            except RowParseError as e:
                errors.append(str(e))

        if errors:
            logger.warning(f"{len(errors)} of {len(data_rows)} rows could not be parsed")
        if not candidates:
            errors.append(NO_VALID_TRADES)

        logger.info(f"Parsed {len(candidates)} trades from {len(data_rows)} rows")
        return ParseResult(
            success=bool(candidates),
            trades=candidates,
            errors=errors,
            headers=headers,
            summary=ParseSummary(
                total_rows=len(data_rows),
                successful_parsed=len(candidates),
                failed=len(data_rows) - len(candidates),
                date_range=date_range(candidates),
            ),
        )
