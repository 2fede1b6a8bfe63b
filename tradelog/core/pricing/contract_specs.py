"""
Contract specification table.

Converts a (market, symbol, lot size) triple into the currency value of one
unit of price movement and the cost of the bid/ask spread.

Note the lot-size asymmetry between markets: the forex multiplier already
includes the lot size, while futures and indices multipliers are per contract
and lot size only reaches the spread cost. Gross P&L on a 2-contract ES trade
therefore equals that of a 1-contract trade.
"""

from collections.abc import Callable
from dataclasses import dataclass

from cachetools import LRUCache, cached

from tradelog.core.constants import (
    DEFAULT_POINT_VALUE,
    FOREX_PIP_VALUE_PER_LOT,
    STANDARD_LOT_UNITS,
    TWO_DECIMAL_LOT_UNITS,
    TWO_DECIMAL_QUOTE_CURRENCIES,
)
from tradelog.core.enums import Market
from tradelog.core.types.financial import ZERO

SymbolPredicate = Callable[[str], bool]


def _prefix(root: str) -> SymbolPredicate:
    return lambda symbol: symbol.startswith(root)


# Evaluated top to bottom; micro contracts precede their standard
# counterparts so MES never resolves as ES.
FUTURES_POINT_VALUE_RULES: tuple[tuple[str, SymbolPredicate, float], ...] = (
    ("MES", _prefix("MES"), 5.0),
    ("MNQ", _prefix("MNQ"), 2.0),
    ("MYM", _prefix("MYM"), 0.5),
    ("M2K", _prefix("M2K"), 5.0),
    ("MGC", _prefix("MGC"), 10.0),
    ("MCL", _prefix("MCL"), 100.0),
    ("M6E", _prefix("M6E"), 1250.0),
    ("M6B", _prefix("M6B"), 625.0),
    ("ES", _prefix("ES"), 50.0),
    ("NQ", _prefix("NQ"), 20.0),
    ("YM", _prefix("YM"), 5.0),
    ("RTY", _prefix("RTY"), 50.0),
    ("GC", _prefix("GC"), 100.0),
    ("CL", _prefix("CL"), 1000.0),
)


@dataclass(frozen=True)
class ContractSpec:
    """Resolved contract convention for one trade."""

    market: Market
    multiplier: float
    spread_cost_per_unit: float

    def spread_cost(self, spread: float) -> float:
        """Convert a spread in native units (pips, ticks, points) into currency."""
        return spread * self.spread_cost_per_unit


def normalize_symbol(symbol: str) -> str:
    """Uppercase a symbol and drop separators brokers add (``EUR/USD``, ``/ES``)."""
    return symbol.strip().upper().replace("/", "").replace(" ", "")


@cached(cache=LRUCache(maxsize=1024))
def futures_point_value(symbol: str) -> float:
    """Get the dollar value of a one-point move for one futures contract.

    Unknown symbols resolve to the default point value of 1.
    """
    normalized = normalize_symbol(symbol)
    for _root, matches, point_value in FUTURES_POINT_VALUE_RULES:
        if matches(normalized):
            return point_value
    return DEFAULT_POINT_VALUE


def is_two_decimal_quote(symbol: str) -> bool:
    """Check if a forex pair is quoted to two decimals (JPY-style pips)."""
    normalized = normalize_symbol(symbol)
    return any(currency in normalized for currency in TWO_DECIMAL_QUOTE_CURRENCIES)


def resolve_contract_spec(
    market: Market | str,
    symbol: str,
    lot_size: float,
    custom_multiplier: float | None = None,
) -> ContractSpec:
    """Resolve the multiplier and spread cost convention for a trade.

    Args:
        market: Market the instrument trades in
        symbol: Instrument symbol
        lot_size: Lots or contracts traded
        custom_multiplier: Optional override; replaces the table value when > 0

    Returns:
        Resolved ContractSpec. Never raises for unknown symbols.
    """
    market = Market(market)

    if custom_multiplier is not None and custom_multiplier > ZERO:
        return ContractSpec(
            market=market,
            multiplier=custom_multiplier,
            spread_cost_per_unit=custom_multiplier * lot_size,
        )

    if market == Market.FOREX:
        lot_units = TWO_DECIMAL_LOT_UNITS if is_two_decimal_quote(symbol) else STANDARD_LOT_UNITS
        return ContractSpec(
            market=market,
            multiplier=lot_units * lot_size,
            # Fixed pip value regardless of quote precision
            spread_cost_per_unit=lot_size * FOREX_PIP_VALUE_PER_LOT,
        )

    if market == Market.FUTURES:
        point_value = futures_point_value(symbol)
        return ContractSpec(
            market=market,
            multiplier=point_value,
            spread_cost_per_unit=point_value * lot_size,
        )

    return ContractSpec(
        market=market,
        multiplier=DEFAULT_POINT_VALUE,
        spread_cost_per_unit=lot_size,
    )
