"""
Market enumeration.

This module defines the instrument families the P&L calculator understands.
"""

from enum import StrEnum


class Market(StrEnum):
    """
    Supported markets.

    Each market carries its own contract convention for converting
    a price move into currency.
    """

    FOREX = "forex"  # Lot-based, pip valued
    FUTURES = "futures"  # Fixed dollar value per point
    INDICES = "indices"  # One currency unit per point

    @classmethod
    def from_string(cls, value: str | None) -> "Market":
        """
        Convert string to Market enum, with case-insensitive matching.

        Missing values fall back to forex, the journal's default market.

        Raises:
            ValueError: If market is not supported
        """
        if not value:
            return cls.FOREX
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            raise ValueError(
                f"Unsupported market: {value}. "
                f"Supported markets: {', '.join([m.value for m in cls])}"
            ) from e
