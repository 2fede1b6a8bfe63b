"""
Core constants and limits.

Defines the instrument conventions, import limits and storage keys
shared across the trade journal.
"""

# Account tagging
DEFAULT_ACCOUNT_ID = "default-main-account"  # Sentinel for untagged trades

# Storage keys
TRADES_STORAGE_KEY = "trades"
JOURNAL_ENTRIES_STORAGE_KEY = "journalEntries"
ACCOUNT_MIGRATION_KEY = "trades-accountId-migration-v1"

# Import limits
MAX_IMPORT_FILE_BYTES = 10 * 1024 * 1024  # 10MB upload limit
CSV_EXTENSIONS = (".csv",)
EXCEL_EXTENSIONS = (".xlsx", ".xls")
ALLOWED_IMPORT_EXTENSIONS = CSV_EXTENSIONS + EXCEL_EXTENSIONS
IMPORTED_TRADE_NOTE = "Imported from CSV"

# Forex conventions
STANDARD_LOT_UNITS = 100000.0  # Units in one standard lot
TWO_DECIMAL_LOT_UNITS = 1000.0  # JPY-style quotes move in 0.01 pips
TWO_DECIMAL_QUOTE_CURRENCIES = ("JPY", "HUF")
FOREX_PIP_VALUE_PER_LOT = 10.0  # Fixed $10 per pip per standard lot

# Futures / indices conventions
DEFAULT_POINT_VALUE = 1.0

# Export formats
EXPORT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
REPORT_PERIOD_FORMAT = "%m/%d/%Y"
REPORT_TRADE_TIMESTAMP_FORMAT = "%m/%d/%Y %H:%M"

TRADE_EXPORT_COLUMNS = (
    "symbol",
    "side",
    "entryPrice",
    "exitPrice",
    "lotSize",
    "entryTime",
    "exitTime",
    "spread",
    "commission",
    "swap",
    "pnl",
    "pnlPercentage",
    "riskReward",
    "strategy",
    "market",
    "notes",
)

# Import sessions
IMPORT_SESSION_TTL_SECONDS = 30 * 60  # Abandoned previews expire after 30 minutes
MAX_IMPORT_SESSIONS = 256
