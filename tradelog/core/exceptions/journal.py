"""
Custom exception hierarchy for the trade journal.

This module defines domain-specific exceptions for better error handling.
Calculation degeneracies (zero risk, zero investment) are deliberately absent:
they resolve to 0 instead of raising.
"""


class TradeLogException(Exception):
    """Base exception for all trade journal errors."""

    pass


class ValidationError(TradeLogException):
    """Raised when input validation fails."""

    pass


class DataError(TradeLogException):
    """Raised when data access or processing fails."""

    pass


class StorageError(DataError):
    """Raised when the persistence store cannot be read or written."""

    pass


class FileValidationError(ValidationError):
    """Raised when an uploaded file is rejected before parsing."""

    def __init__(self, message: str, filename: str | None = None):
        self.filename = filename
        super().__init__(message)


class MissingColumnError(DataError):
    """Raised when required columns cannot be detected in a header row."""

    def __init__(self, missing: list[str], available: list[str]):
        self.missing = list(missing)
        self.available = list(available)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")


class MappingIncompleteError(ValidationError):
    """Raised when a confirmed column mapping leaves required fields unmapped."""

    def __init__(self, unmapped: list[str], reason: str = "Missing required mappings"):
        self.unmapped = list(unmapped)
        super().__init__(f"{reason}: {', '.join(self.unmapped)}")


class RowParseError(DataError):
    """Raised when a single import row holds unusable data."""

    def __init__(self, row_number: int, reason: str):
        self.row_number = row_number
        self.reason = reason
        super().__init__(f"Row {row_number}: {reason}")


class InvalidStateTransitionError(TradeLogException):
    """Raised when an import is driven through an illegal state change."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move import from {current} to {target}")


class TradeNotFoundError(DataError):
    """Raised when trying to operate on a non-existent trade."""

    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(f"Trade not found: {trade_id}")


class ImportFailedError(DataError):
    """Raised when an import file yields no usable trades for a reason other than columns."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Import failed")
