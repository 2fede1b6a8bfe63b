"""
Trade fingerprints for duplicate detection.

A fingerprint is the exact concatenation of the fields that identify a trade
across repeated imports. There is no tolerance: any difference in any field
yields a distinct fingerprint.
"""

from tradelog.core.models.trade import epoch_millis
from tradelog.core.protocols import FingerprintedTrade
from tradelog.core.types.financial import format_number

FINGERPRINT_SEPARATOR = "|"


def fingerprint(trade: FingerprintedTrade) -> str:
    """Build the duplicate-detection key of a trade.

    Format: symbol|side|entryPrice|exitPrice|lotSize|pnl|entryMs|exitMs

    Examples:
        EURUSD|long|1.1|1.105|1|483|1756339200000|1756342800000
    """
    parts = (
        trade.symbol,
        str(trade.side),
        format_number(trade.entry_price),
        format_number(trade.exit_price),
        format_number(trade.lot_size),
        format_number(trade.pnl),
        str(epoch_millis(trade.entry_time)),
        str(epoch_millis(trade.exit_time)),
    )
    return FINGERPRINT_SEPARATOR.join(parts)
