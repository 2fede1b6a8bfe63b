"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    FINANCIAL_DECIMALS,
    HUNDRED,
    ONE,
    PERCENTAGE_DECIMALS,
    ZERO,
    calculate_gross_pnl,
    format_number,
    parse_currency,
    parse_decimal,
    round_amount,
    round_percentage,
    safe_divide,
)

__all__ = [
    # Utility functions
    "parse_currency",
    "parse_decimal",
    "round_amount",
    "round_percentage",
    "safe_divide",
    "calculate_gross_pnl",
    "format_number",
    # Constants
    "FINANCIAL_DECIMALS",
    "PERCENTAGE_DECIMALS",
    "ZERO",
    "ONE",
    "HUNDRED",
]
