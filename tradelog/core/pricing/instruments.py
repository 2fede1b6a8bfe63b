"""
Instrument catalogue and market inference.

Broker exports rarely state the market of a trade, so imported symbols are
classified against curated instrument sets.
"""

import re

from loguru import logger

from tradelog.core.enums import Market

from .contract_specs import normalize_symbol

FOREX_INSTRUMENTS = frozenset(
    {
        "EURUSD", "GBPUSD", "USDJPY", "USDCHF", "AUDUSD", "USDCAD", "NZDUSD",
        "EURJPY", "GBPJPY", "EURGBP", "CHFJPY", "CADCHF", "AUDCHF", "USDSEK",
        "USDNOK", "USDDKK", "EURAUD", "EURNZD", "GBPAUD",
    }
)  # fmt: skip

FOREX_CURRENCIES = frozenset(
    {"USD", "EUR", "GBP", "JPY", "CHF", "AUD", "CAD", "NZD", "SEK", "NOK", "DKK", "HUF"}
)

FUTURES_ROOTS = frozenset(
    {
        "MES", "MNQ", "MYM", "M2K", "MGC", "MCL", "M6E", "M6B",
        "ES", "NQ", "YM", "RTY", "CL", "GC", "SI", "NG", "RB", "HG",
        "ZB", "ZN", "ZF", "6E", "6B",
    }
)  # fmt: skip

INDICES_INSTRUMENTS = frozenset(
    {
        "SPX500", "NAS100", "US30", "GER40", "UK100", "FRA40", "JPN225", "AUS200",
        "US500", "US100", "DE40", "SPX", "NDX", "DJI",
    }
)  # fmt: skip

# Exchange-traded funds are priced per point like cash indices
ETF_INSTRUMENTS = frozenset({"SPY", "QQQ", "DIA", "IWM", "VTI", "VOO"})

# Root + month code + 1-2 digit year, e.g. MNQU5, ESZ24
_FUTURES_CONTRACT = re.compile(r"^(?P<root>[A-Z0-9]+?)[FGHJKMNQUVXZ]\d{1,2}$")


def is_futures_symbol(symbol: str) -> bool:
    """Check if a symbol is a futures root or a dated futures contract."""
    normalized = normalize_symbol(symbol)
    if normalized in FUTURES_ROOTS:
        return True
    match = _FUTURES_CONTRACT.match(normalized)
    return bool(match) and match.group("root") in FUTURES_ROOTS


def is_forex_symbol(symbol: str) -> bool:
    """Check if a symbol is a known pair or two known currency codes."""
    normalized = normalize_symbol(symbol)
    if normalized in FOREX_INSTRUMENTS:
        return True
    return (
        len(normalized) == 6
        and normalized[:3] in FOREX_CURRENCIES
        and normalized[3:] in FOREX_CURRENCIES
    )


def infer_market(symbol: str) -> Market:
    """
    Infer the market of a symbol.

    Index CFDs and ETFs are checked first so codes like US30 are not
    mistaken for futures contracts. Unrecognized symbols default to forex.

    Args:
        symbol: Instrument symbol as written in the export

    Returns:
        Inferred Market
    """
    normalized = normalize_symbol(symbol)
    if normalized in INDICES_INSTRUMENTS or normalized in ETF_INSTRUMENTS:
        return Market.INDICES
    if is_forex_symbol(normalized):
        return Market.FOREX
    if is_futures_symbol(normalized):
        return Market.FUTURES

    logger.debug(f"Unrecognized symbol {symbol}, defaulting to forex")
    return Market.FOREX
