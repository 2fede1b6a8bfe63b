"""
Financial helpers for trade P&L calculations.

Journal arithmetic runs on plain floats, like the broker exports it reads.
Results are rounded with the helpers below so repeated calculations over
the same inputs produce identical, comparable values.

Precision notes:
- Float64 provides ~15-16 significant decimal digits
- Currency amounts are rounded to 8 decimals to absorb representation noise
  (e.g. (1.1050 - 1.1000) * 100000 == 499.99999999999545)
- Percentages are rounded to 4 decimals
"""

import math
import re
from decimal import Decimal

# Financial calculation precision (number of decimal places)
FINANCIAL_DECIMALS = 8
PERCENTAGE_DECIMALS = 4

# Common financial values as float constants
ZERO = 0.0
ONE = 1.0
HUNDRED = 100.0

_CURRENCY_NOISE = re.compile(r"[$£€¥₹,\s]")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_currency(value: str, default: float = ZERO) -> float:
    """Parse a broker-formatted money string.

    Strips currency symbols, thousands separators and whitespace, and reads
    accounting negatives such as ``(12.50)``.

    Examples:
        >>> parse_currency('$1,234.50')
        1234.5
        >>> parse_currency('(12.50)')
        -12.5
        >>> parse_currency('n/a')
        0.0
    """
    cleaned = _CURRENCY_NOISE.sub("", value or "")
    negative = cleaned.startswith("(") and cleaned.endswith(")")
    cleaned = _NON_NUMERIC.sub("", cleaned)
    try:
        amount = float(cleaned)
    except ValueError:
        return default
    return -abs(amount) if negative else amount


def parse_decimal(value: str) -> float | None:
    """Parse a numeric cell, keeping only digits, dot and minus.

    Returns:
        Parsed float, or None when no number can be read
    """
    cleaned = _NON_NUMERIC.sub("", value or "")
    try:
        return float(cleaned)
    except ValueError:
        return None


def round_amount(amount: float) -> float:
    """Round a currency amount to calculation precision."""
    return round(amount, FINANCIAL_DECIMALS)


def round_percentage(percentage: float) -> float:
    """Round percentage to appropriate precision."""
    return round(percentage, PERCENTAGE_DECIMALS)


def safe_divide(numerator: float, denominator: float, default: float = ZERO) -> float:
    """Divide, returning default when the denominator is zero or not finite.

    Examples:
        >>> safe_divide(6.0, 2.0)
        3.0
        >>> safe_divide(1.0, 0.0)
        0.0
    """
    if denominator == ZERO or denominator != denominator or abs(denominator) == float("inf"):
        return default
    return numerator / denominator


def calculate_gross_pnl(
    entry_price: float,
    exit_price: float,
    multiplier: float,
    side: str,
) -> float:
    """Calculate gross P&L for a price move.

    Args:
        entry_price: Entry price of the trade
        exit_price: Exit price of the trade
        multiplier: Currency value of one unit of price movement
        side: 'long' or 'short'

    Returns:
        Gross P&L before costs

    Raises:
        ValueError: If side is not long or short
    """
    side_lower = side.lower()

    if side_lower == "long":
        return (exit_price - entry_price) * multiplier
    elif side_lower == "short":
        return (entry_price - exit_price) * multiplier
    else:
        raise ValueError(f"Invalid side: {side}")


def format_number(value: float | None) -> str:
    """Render a number the way the journal stores it in text form.

    Follows JavaScript's number-to-string rules so values written by browser
    clients and by this package read alike: integral floats drop their
    ``.0``, and exponent notation is used only below 1e-6 and from 1e21 on,
    written ``1e-7`` and ``1e+21``.

    Examples:
        >>> format_number(2.0)
        '2'
        >>> format_number(1.105)
        '1.105'
        >>> format_number(0.00001)
        '0.00001'
        >>> format_number(1e-7)
        '1e-7'
    """
    if value is None:
        return ""
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == ZERO:
        return "0"

    # Shortest round-trip digits, as JavaScript picks them
    negative, digit_tuple, exponent = Decimal(repr(number)).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    count = len(digits)
    point = count + exponent  # position of the decimal point in digits

    if count <= point <= 21:
        text = digits + "0" * (point - count)
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        power = point - 1
        mantissa = digits if count == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
    return f"-{text}" if negative else text
