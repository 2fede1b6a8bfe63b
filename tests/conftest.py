"""
Shared fixtures for trade journal tests.
"""

from collections.abc import Callable
from datetime import date, datetime
from typing import Any

import pytest

from tradelog.core.enums import Market, Side
from tradelog.core.models.trade import Trade
from tradelog.core.pricing.pnl_calculator import PnLCalculator
from tradelog.infrastructure.csv_import import TradeCandidateNormalizer, TradeCSVParser
from tradelog.infrastructure.storage import InMemoryKeyValueStore, KeyValueTradeRepository

FIXED_TODAY = date(2025, 9, 1)


@pytest.fixture
def calculator() -> PnLCalculator:
    return PnLCalculator()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(store: InMemoryKeyValueStore) -> KeyValueTradeRepository:
    return KeyValueTradeRepository(store)


@pytest.fixture
def normalizer(calculator: PnLCalculator) -> TradeCandidateNormalizer:
    """Normalizer with a fixed clock for rows without dates."""
    return TradeCandidateNormalizer(calculator, today=lambda: FIXED_TODAY)


@pytest.fixture
def parser(normalizer: TradeCandidateNormalizer) -> TradeCSVParser:
    return TradeCSVParser(normalizer)


@pytest.fixture
def make_trade() -> Callable[..., Trade]:
    """Factory for trades with sensible EURUSD defaults."""

    def _make_trade(**overrides: Any) -> Trade:
        values: dict[str, Any] = {
            "id": "trade-1",
            "symbol": "EURUSD",
            "side": Side.LONG,
            "market": Market.FOREX,
            "entry_price": 1.1,
            "exit_price": 1.105,
            "lot_size": 1.0,
            "entry_time": datetime(2025, 8, 28, 10, 0),
            "exit_time": datetime(2025, 8, 28, 11, 0),
        }
        values.update(overrides)
        return Trade(**values)

    return _make_trade


@pytest.fixture
def broker_csv() -> str:
    """Broker export whose headers are all detected automatically."""
    return (
        "Symbol,Side,Open Price,Close Price,Lots,Profit,Open Time,Close Time\n"
        "EURUSD,Buy,1.1000,1.1050,1,483,28/08/2025 10:00,28/08/2025 11:00\n"
        "USDJPY,Sell,150.00,149.50,2,956,29/08/2025 09:30,29/08/2025 12:15\n"
        "ESZ24,Buy,4500,4510,2,,2025-08-30 14:00,2025-08-30 15:00\n"
    )
