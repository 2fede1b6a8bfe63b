"""
Column mapping field enumeration.

This module defines the semantic fields a broker export column can be mapped to.
"""

from enum import StrEnum


class MappingField(StrEnum):
    """Semantic trade fields recognized in import files."""

    SYMBOL = "symbol"
    SIDE = "side"
    OPEN_PRICE = "openPrice"
    CLOSE_PRICE = "closePrice"
    QUANTITY = "quantity"
    PNL = "pnl"
    OPEN_TIME = "openTime"
    CLOSE_TIME = "closeTime"

    @property
    def is_required(self) -> bool:
        """Check if the field must be mapped before rows can be parsed."""
        return self not in (self.OPEN_TIME, self.CLOSE_TIME)

    @classmethod
    def required(cls) -> tuple["MappingField", ...]:
        """Get the required fields in detection order."""
        return tuple(field for field in cls if field.is_required)
