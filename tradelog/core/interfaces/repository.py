"""
Trade persistence interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any

from tradelog.core.models.trade import Trade


class ITradeRepository(ABC):
    """Abstract interface for the stored trade set.

    Writes work on single records or on the raw record list, so stored
    records the caller did not touch are written back exactly as read.
    """

    @abstractmethod
    def load(self) -> list[Trade]:
        """Load every readable stored trade, across all accounts."""
        pass

    @abstractmethod
    def load_records(self) -> list[Any]:
        """Load the raw stored records, readable or not."""
        pass

    @abstractmethod
    def save_records(self, records: list[Any]) -> None:
        """Replace the raw stored records."""
        pass

    @abstractmethod
    def add(self, trade: Trade) -> None:
        """Append a trade after the stored records."""
        pass

    @abstractmethod
    def update(self, trade: Trade) -> None:
        """Overwrite the stored record carrying the trade's id."""
        pass

    @abstractmethod
    def delete(self, trade_id: str) -> None:
        """Remove the stored record carrying this id."""
        pass
