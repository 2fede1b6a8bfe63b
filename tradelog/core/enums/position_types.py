"""
Trade side enumeration.

This module defines the allowed directions of a trade.
"""

from enum import StrEnum


class Side(StrEnum):
    """
    Allowed trade sides.

    Defines whether a trade profits from rising (long) or falling (short) prices.
    """

    LONG = "long"
    SHORT = "short"

    @property
    def is_long(self) -> bool:
        """Check if side is long."""
        return self == self.LONG

    @classmethod
    def from_broker_value(cls, value: str) -> "Side":
        """
        Normalize a broker side label.

        Brokers label direction as Buy/Sell, Long/Short or single letters.
        Anything that is not recognizably a buy is treated as a short.

        Args:
            value: Raw side label from an export file

        Returns:
            Normalized Side
        """
        normalized = value.strip().lower()
        if normalized in ("buy", "long", "l", "b"):
            return cls.LONG
        return cls.SHORT
