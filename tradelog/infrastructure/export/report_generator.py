"""
Trading performance report generation.

A report covers the trades closed within a period: the current month,
quarter or year, or a custom date range. It carries summary metrics,
per-symbol and per-strategy breakdowns and the trade listing, and renders
as a sectioned CSV document.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pandas as pd
from loguru import logger

from tradelog.core.constants import REPORT_PERIOD_FORMAT, REPORT_TRADE_TIMESTAMP_FORMAT
from tradelog.core.enums import ReportPeriod
from tradelog.core.exceptions.journal import ValidationError
from tradelog.core.models.trade import Trade
from tradelog.core.types.financial import ZERO, format_number, safe_divide

_ONE_MICROSECOND = timedelta(microseconds=1)

REPORT_TRADE_COLUMNS = [
    "Date",
    "Symbol",
    "Market",
    "Side",
    "Entry",
    "Exit",
    "Lots",
    "Spread",
    "Commission",
    "Swap",
    "P&L",
    "R:R",
    "Strategy",
    "Notes",
]


def report_window(
    period: ReportPeriod | str,
    now: datetime,
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> tuple[datetime, datetime]:
    """
    Resolve the inclusive start and end of a report period.

    Calendar periods are the month, quarter or year containing ``now``.
    A custom range given as plain dates covers the whole end day.

    Raises:
        ValidationError: If a custom range lacks a bound or is reversed
    """
    period = ReportPeriod(period)
    if period == ReportPeriod.CUSTOM:
        if start is None or end is None:
            raise ValidationError("Custom reports need both a start and an end date")
        window_start = _as_datetime(start)
        window_end = _as_datetime(end)
        if not isinstance(end, datetime):
            window_end = window_end + timedelta(days=1) - _ONE_MICROSECOND
        if window_end < window_start:
            raise ValidationError("Report end date is before its start date")
        return window_start, window_end

    current = pd.Period(now, freq=period.pandas_frequency)
    window_start = current.start_time.to_pydatetime()
    window_end = (current + 1).start_time.to_pydatetime() - _ONE_MICROSECOND
    return window_start, window_end


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


@dataclass
class TradingReport:
    """Aggregated performance over one period."""

    start: datetime
    end: datetime
    summary: dict[str, float]
    symbol_breakdown: list[dict[str, Any]] = field(default_factory=list)
    strategy_breakdown: list[dict[str, Any]] = field(default_factory=list)
    trades: list[Trade] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "period": {"start": self.start.isoformat(), "end": self.end.isoformat()},
            "summary": self.summary,
            "symbolBreakdown": self.symbol_breakdown,
            "strategyBreakdown": self.strategy_breakdown,
            "trades": [trade.to_dict() for trade in self.trades],
        }

    def to_csv(self) -> str:
        """Render the report as a sectioned CSV document.

        Each section is a titled table written through pandas, so free text
        such as strategy names and notes is quoted when it holds commas.
        """
        summary = self.summary
        metrics = pd.DataFrame(
            [
                ("Total Trades", str(summary["totalTrades"])),
                ("Winning Trades", str(summary["wins"])),
                ("Losing Trades", str(summary["losses"])),
                ("Win Rate", f"{summary['winRate']:.2f}%"),
                ("Total P&L", _money(summary["totalPnL"])),
                ("Total Commission", _money(summary["totalCommission"])),
                ("Total Swap/Rollover", _money(summary["totalSwap"])),
                ("Net P&L", _money(summary["netPnL"])),
                ("Average P&L per Trade", _money(summary["averagePnL"])),
                ("Largest Win", _money(summary["largestWin"])),
                ("Largest Loss", _money(summary["largestLoss"])),
            ],
            columns=["Metric", "Value"],
        )
        header = (
            "Trading Report\n"
            f"Period: {self.start.strftime(REPORT_PERIOD_FORMAT)} - "
            f"{self.end.strftime(REPORT_PERIOD_FORMAT)}\n"
        )
        sections = [
            header,
            _section("Summary Metrics", metrics),
            _section("Performance by Symbol", _breakdown_frame(self.symbol_breakdown, "symbol")),
            _section(
                "Performance by Strategy", _breakdown_frame(self.strategy_breakdown, "strategy")
            ),
            _section(
                "Individual Trade Details",
                pd.DataFrame(
                    [_trade_row(trade) for trade in self.trades],
                    columns=REPORT_TRADE_COLUMNS,
                    dtype=str,
                ),
            ),
        ]
        return "\n".join(sections)


def _section(title: str, table: pd.DataFrame) -> str:
    return f"{title}\n" + table.to_csv(index=False, lineterminator="\n")


def _breakdown_frame(rows: list[dict[str, Any]], column: str) -> pd.DataFrame:
    return pd.DataFrame(
        [(row[column], str(row["trades"]), _money(row["pnl"])) for row in rows],
        columns=[column.capitalize(), "Trades", "P&L"],
        dtype=str,
    )


def _money(amount: float) -> str:
    return f"${amount:.2f}"


def _trade_row(trade: Trade) -> list[str]:
    return [
        trade.exit_time.strftime(REPORT_TRADE_TIMESTAMP_FORMAT),
        trade.symbol,
        trade.market.value,
        trade.side.value,
        format_number(trade.entry_price),
        format_number(trade.exit_price),
        format_number(trade.lot_size),
        format_number(trade.spread),
        format_number(trade.commission),
        format_number(trade.swap),
        f"{trade.pnl:.2f}",
        f"{trade.risk_reward:.2f}" if trade.risk_reward else "",
        trade.strategy,
        trade.notes,
    ]


class ReportGenerator:
    """
    Builds performance reports from journal trades.

    Features:
    - Calendar (monthly, quarterly, yearly) and custom periods, bounded on exit time
    - Win/loss counts, win rate, P&L totals and extremes
    - Per-symbol and per-strategy breakdowns in first-seen order
    """

    def generate(
        self,
        trades: Sequence[Trade],
        period: ReportPeriod | str = ReportPeriod.MONTHLY,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        now: datetime | None = None,
    ) -> TradingReport:
        """
        Generate a report for one period.

        Args:
            trades: Candidate trades, typically one account's journal
            period: Calendar period or custom
            start: First day of a custom period
            end: Last day of a custom period
            now: Reference time for calendar periods; defaults to the current UTC time

        Returns:
            TradingReport over the trades closed within the period

        Raises:
            ValidationError: If a custom period is incomplete or reversed
        """
        reference = now or datetime.now(UTC).replace(tzinfo=None)
        window_start, window_end = report_window(period, reference, start, end)
        selected = [trade for trade in trades if window_start <= trade.exit_time <= window_end]

        frame = self._to_frame(selected)
        report = TradingReport(
            start=window_start,
            end=window_end,
            summary=self._summary(frame),
            symbol_breakdown=self._breakdown(frame, "symbol"),
            strategy_breakdown=self._breakdown(frame[frame["strategy"] != ""], "strategy"),
            trades=selected,
        )
        logger.info(
            f"Generated {ReportPeriod(period).value} report "
            f"{window_start.date()} - {window_end.date()}: {len(selected)} trades"
        )
        return report

    @staticmethod
    def _to_frame(trades: Sequence[Trade]) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "symbol": [trade.symbol for trade in trades],
                "strategy": [trade.strategy for trade in trades],
                "pnl": [trade.pnl for trade in trades],
                "commission": [trade.commission for trade in trades],
                "swap": [trade.swap for trade in trades],
            },
            columns=["symbol", "strategy", "pnl", "commission", "swap"],
        ).astype({"pnl": float, "commission": float, "swap": float})

    @staticmethod
    def _summary(frame: pd.DataFrame) -> dict[str, float]:
        """Calculate summary metrics.

        Net P&L subtracts commission and swap from the summed trade P&L.
        """
        total_trades = len(frame)
        wins = frame.loc[frame["pnl"] > ZERO, "pnl"]
        losses = frame.loc[frame["pnl"] < ZERO, "pnl"]
        total_pnl = float(frame["pnl"].sum())
        total_commission = float(frame["commission"].sum())
        total_swap = float(frame["swap"].sum())

        return {
            "totalTrades": total_trades,
            "wins": len(wins),
            "losses": len(losses),
            "winRate": safe_divide(len(wins), total_trades) * 100,
            "totalPnL": total_pnl,
            "totalCommission": total_commission,
            "totalSwap": total_swap,
            "netPnL": total_pnl - total_commission - total_swap,
            "averagePnL": safe_divide(total_pnl, total_trades),
            "largestWin": float(wins.max()) if not wins.empty else ZERO,
            "largestLoss": float(losses.min()) if not losses.empty else ZERO,
        }

    @staticmethod
    def _breakdown(frame: pd.DataFrame, column: str) -> list[dict[str, Any]]:
        if frame.empty:
            return []
        grouped = frame.groupby(column, sort=False)["pnl"].agg(["count", "sum"])
        return [
            {column: key, "trades": int(row["count"]), "pnl": float(row["sum"])}
            for key, row in grouped.iterrows()
        ]
