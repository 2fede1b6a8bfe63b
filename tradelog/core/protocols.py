"""
Core type definitions and protocols.

This module defines shared protocols so the calculator, reconciler and
storage layer can work with any object of the right shape without
depending on each other.
"""

from datetime import datetime
from typing import Protocol

from tradelog.core.enums import Market, Side


class PricedTrade(Protocol):
    """Protocol for the economic fields the P&L calculator reads.

    Satisfied by Trade as well as by API request models.
    """

    symbol: str
    market: Market
    side: Side
    entry_price: float
    exit_price: float
    lot_size: float
    stop_loss: float | None
    take_profit: float | None
    spread: float
    commission: float
    swap: float
    custom_multiplier: float | None
    use_manual_pnl: bool
    manual_pnl: float | None


class FingerprintedTrade(Protocol):
    """Protocol for the fields that identify a trade across imports."""

    symbol: str
    side: Side
    entry_price: float
    exit_price: float
    lot_size: float
    pnl: float | None
    entry_time: datetime
    exit_time: datetime


class KeyValueStore(Protocol):
    """Protocol for the string-keyed store trades are persisted in."""

    def get_item(self, key: str) -> str | None:
        """Read a value, or None when the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Write a value."""
        ...
