"""
Import candidate model.

A TradeCandidate is a fully typed row from a broker export, produced by the
normalizer and not yet part of the journal.
"""

from dataclasses import dataclass
from datetime import datetime

from tradelog.core.enums import Market, Side
from tradelog.core.types.financial import ZERO

# Ordered cells of one CSV line, before any coercion
RawRow = list[str]


@dataclass(frozen=True)
class TradeCandidate:
    """Represents one parsed trade awaiting reconciliation.

    ``pnl`` is None when the source file left the P&L cell empty; the
    calculator derives it in that case.
    """

    symbol: str
    side: Side
    market: Market
    entry_price: float
    exit_price: float
    lot_size: float
    entry_time: datetime
    exit_time: datetime
    pnl: float | None
    row_number: int
    spread: float = ZERO
    commission: float = ZERO
    swap: float = ZERO

    @property
    def has_reported_pnl(self) -> bool:
        """Check if the broker file supplied the realized P&L."""
        return self.pnl is not None
