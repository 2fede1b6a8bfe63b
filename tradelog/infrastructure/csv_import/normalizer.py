"""
Trade candidate normalization.

Every string-to-number and string-to-date coercion of the import pipeline
happens here, so parsed rows leave this module fully typed whichever
detection path produced their column mapping.
"""

import uuid
from collections.abc import Callable
from datetime import UTC, date, datetime

import pandas as pd

from tradelog.core.constants import DEFAULT_ACCOUNT_ID, IMPORTED_TRADE_NOTE
from tradelog.core.enums import MappingField, Side
from tradelog.core.exceptions.journal import RowParseError
from tradelog.core.models.candidate import RawRow, TradeCandidate
from tradelog.core.models.column_mapping import UNMAPPED, ColumnMapping
from tradelog.core.models.trade import Trade
from tradelog.core.pricing.instruments import infer_market
from tradelog.core.pricing.pnl_calculator import PnLCalculator
from tradelog.core.types.financial import ONE, ZERO, parse_currency, parse_decimal


def _utc_today() -> date:
    return datetime.now(UTC).date()


def parse_trade_datetime(date_text: str, time_text: str = "") -> datetime:
    """
    Parse a broker date, optionally completed by a separate time cell.

    Slash dates are read day first (``28/08/2025``), dash dates as ISO.
    A missing time means midnight. Aware timestamps are converted to naive UTC.

    Raises:
        ValueError: If the text is empty or not a date
    """
    text = " ".join(part.strip() for part in (date_text, time_text) if part and part.strip())
    if not text:
        raise ValueError("empty date")

    day_first = "/" in text.split(" ")[0]
    try:
        timestamp = pd.to_datetime(text, dayfirst=day_first)
    except (TypeError, OverflowError) as e:
        raise ValueError(str(e)) from e
    if pd.isna(timestamp):
        raise ValueError(f"not a date: {text}")

    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert("UTC").tz_localize(None)
    return timestamp.to_pydatetime()


class TradeCandidateNormalizer:
    """Convert raw rows into typed trade candidates, and candidates into trades."""

    def __init__(
        self,
        calculator: PnLCalculator | None = None,
        account_id: str = DEFAULT_ACCOUNT_ID,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        """
        Initialize the normalizer.

        Args:
            calculator: Calculator deriving percentage, risk-reward and missing P&L
            account_id: Active account imported trades are tagged with
            today: Clock used when a row carries no date at all
        """
        self.calculator = calculator or PnLCalculator()
        self.account_id = account_id or DEFAULT_ACCOUNT_ID
        self._today = today

    def normalize(
        self,
        row: RawRow,
        mapping: ColumnMapping,
        row_number: int,
        time_index: int = UNMAPPED,
    ) -> TradeCandidate:
        """
        Build a typed candidate from one row.

        Args:
            row: Cells of the row
            mapping: Field to column assignment
            row_number: 1-based line number, for error messages
            time_index: Optional separate clock-time column for the open date

        Returns:
            Normalized TradeCandidate

        Raises:
            RowParseError: If a required cell is empty, a price or date is unreadable
        """

        def cell(index: int) -> str:
            if index < 0 or index >= len(row):
                return ""
            return (row[index] or "").strip()

        symbol = cell(mapping[MappingField.SYMBOL])
        side = cell(mapping[MappingField.SIDE])
        open_price = cell(mapping[MappingField.OPEN_PRICE])
        close_price = cell(mapping[MappingField.CLOSE_PRICE])

        if not symbol or not side or not open_price or not close_price:
            raise RowParseError(
                row_number,
                f"Missing required data (symbol: {symbol}, side: {side}, "
                f"openPrice: {open_price}, closePrice: {close_price})",
            )

        entry_price = self._require_price(open_price, MappingField.OPEN_PRICE, row_number)
        exit_price = self._require_price(close_price, MappingField.CLOSE_PRICE, row_number)
        entry_time, exit_time = self._resolve_times(
            open_text=cell(mapping[MappingField.OPEN_TIME]),
            open_clock=cell(time_index),
            close_text=cell(mapping[MappingField.CLOSE_TIME]),
            has_open=mapping.is_mapped(MappingField.OPEN_TIME),
            # A clock-only column matched as closeTime belongs to the open date
            has_close=(
                mapping.is_mapped(MappingField.CLOSE_TIME)
                and mapping[MappingField.CLOSE_TIME] != time_index
            ),
            row_number=row_number,
        )
        pnl_text = cell(mapping[MappingField.PNL])

        return TradeCandidate(
            symbol=symbol,
            side=Side.from_broker_value(side),
            market=infer_market(symbol),
            entry_price=entry_price,
            exit_price=exit_price,
            lot_size=self.coerce_lot_size(cell(mapping[MappingField.QUANTITY])),
            entry_time=entry_time,
            exit_time=exit_time,
            pnl=parse_currency(pnl_text) if pnl_text else None,
            row_number=row_number,
        )

    def to_trade(self, candidate: TradeCandidate, account_id: str | None = None) -> Trade:
        """Turn a candidate into a journal trade.

        A P&L reported by the broker is kept verbatim through the manual
        override; otherwise the calculator derives it.
        """
        trade = Trade(
            id=f"import-{uuid.uuid4().hex}",
            account_id=account_id or self.account_id,
            symbol=candidate.symbol,
            market=candidate.market,
            side=candidate.side,
            entry_price=candidate.entry_price,
            exit_price=candidate.exit_price,
            lot_size=candidate.lot_size,
            entry_time=candidate.entry_time,
            exit_time=candidate.exit_time,
            spread=candidate.spread,
            commission=candidate.commission,
            swap=candidate.swap,
            use_manual_pnl=candidate.has_reported_pnl,
            manual_pnl=candidate.pnl,
            notes=IMPORTED_TRADE_NOTE,
        )
        return self.calculator.apply(trade)

    @staticmethod
    def coerce_lot_size(value: str) -> float:
        """Read a lot size; blank, invalid or zero sizes count as one lot."""
        parsed = parse_decimal(value)
        if parsed is None or parsed == ZERO:
            return ONE
        return abs(parsed)

    @staticmethod
    def _require_price(value: str, mapping_field: MappingField, row_number: int) -> float:
        parsed = parse_decimal(value)
        if parsed is None:
            raise RowParseError(row_number, f"Invalid {mapping_field.value} '{value}'")
        return parsed

    def _resolve_times(
        self,
        open_text: str,
        open_clock: str,
        close_text: str,
        has_open: bool,
        has_close: bool,
        row_number: int,
    ) -> tuple[datetime, datetime]:
        """Derive entry and exit timestamps.

        The open column drives the entry time, the close column the exit
        time; a single available column serves both. Rows with no date at
        all fall back to midnight today.
        """
        entry_time = self._parse_or_none(open_text, open_clock, row_number) if has_open else None
        exit_time = self._parse_or_none(close_text, "", row_number) if has_close else None

        if entry_time is None and exit_time is None:
            midnight = datetime.combine(self._today(), datetime.min.time())
            return midnight, midnight
        if entry_time is None:
            return exit_time, exit_time
        if exit_time is None:
            return entry_time, entry_time
        return entry_time, exit_time

    @staticmethod
    def _parse_or_none(date_text: str, time_text: str, row_number: int) -> datetime | None:
        if not date_text:
            return None
        try:
            return parse_trade_datetime(date_text, time_text)
        except ValueError as e:
            raise RowParseError(row_number, f"Invalid date '{date_text}' ({e})") from e
