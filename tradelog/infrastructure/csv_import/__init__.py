"""
Broker file import pipeline.
"""

from .column_aliases import COLUMN_ALIASES, detect_columns, guess_mapping, validate_mapping
from .csv_parser import TradeCSVParser, read_rows
from .file_validator import TradeFileValidator
from .import_session import ImportSession
from .mapping_resolver import ColumnMappingResolver
from .normalizer import TradeCandidateNormalizer, parse_trade_datetime

__all__ = [
    "COLUMN_ALIASES",
    "ColumnMappingResolver",
    "ImportSession",
    "TradeCSVParser",
    "TradeCandidateNormalizer",
    "TradeFileValidator",
    "detect_columns",
    "guess_mapping",
    "parse_trade_datetime",
    "read_rows",
    "validate_mapping",
]
