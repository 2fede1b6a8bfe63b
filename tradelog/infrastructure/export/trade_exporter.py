"""
Trade CSV export.
"""

from collections.abc import Sequence
from typing import Any

import pandas as pd

from tradelog.core.constants import EXPORT_TIMESTAMP_FORMAT, TRADE_EXPORT_COLUMNS
from tradelog.core.models.trade import Trade
from tradelog.core.types.financial import format_number


def _export_value(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "strftime"):
        return value.strftime(EXPORT_TIMESTAMP_FORMAT)
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int | float):
        return format_number(value)
    return str(value)


def trades_to_frame(trades: Sequence[Trade]) -> pd.DataFrame:
    """Build the export table: one row per trade, columns in export order."""
    records = []
    for trade in trades:
        values = {
            "symbol": trade.symbol,
            "side": trade.side.value,
            "entryPrice": trade.entry_price,
            "exitPrice": trade.exit_price,
            "lotSize": trade.lot_size,
            "entryTime": trade.entry_time,
            "exitTime": trade.exit_time,
            "spread": trade.spread,
            "commission": trade.commission,
            "swap": trade.swap,
            "pnl": trade.pnl,
            "pnlPercentage": trade.pnl_percentage,
            "riskReward": trade.risk_reward,
            "strategy": trade.strategy,
            "market": trade.market.value,
            "notes": trade.notes,
        }
        records.append({column: _export_value(values[column]) for column in TRADE_EXPORT_COLUMNS})
    return pd.DataFrame(records, columns=list(TRADE_EXPORT_COLUMNS), dtype=str)


def export_trades_csv(trades: Sequence[Trade]) -> str:
    """
    Render trades as CSV text with the fixed export header.

    Timestamps are written ``yyyy-MM-dd HH:mm:ss``; numbers keep their
    shortest form (``1`` rather than ``1.0``).
    """
    return trades_to_frame(trades).to_csv(index=False, lineterminator="\n")
