"""
Trade and report export.
"""

from .report_generator import ReportGenerator, TradingReport, report_window
from .trade_exporter import export_trades_csv, trades_to_frame

__all__ = [
    "ReportGenerator",
    "TradingReport",
    "export_trades_csv",
    "report_window",
    "trades_to_frame",
]
