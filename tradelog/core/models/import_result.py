"""
Import and reconciliation result models.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .candidate import TradeCandidate
from .trade import Trade


@dataclass(frozen=True)
class DateRange:
    """Earliest and latest trade dates found in a file."""

    earliest: date
    latest: date

    def to_dict(self) -> dict[str, str]:
        """Convert date range to dictionary."""
        return {"earliest": self.earliest.isoformat(), "latest": self.latest.isoformat()}


@dataclass
class ParseSummary:
    """Row counters for one parse run."""

    total_rows: int = 0
    successful_parsed: int = 0
    failed: int = 0
    date_range: DateRange | None = None

    def to_dict(self) -> dict:
        """Convert summary to dictionary."""
        return {
            "totalRows": self.total_rows,
            "successfulParsed": self.successful_parsed,
            "failed": self.failed,
            "dateRange": self.date_range.to_dict() if self.date_range else None,
        }


@dataclass
class ParseResult:
    """Outcome of parsing an import file."""

    success: bool = False
    trades: list[TradeCandidate] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)
    missing_columns: list[str] = field(default_factory=list)
    summary: ParseSummary = field(default_factory=ParseSummary)

    @property
    def requires_mapping(self) -> bool:
        """Check if column detection failed and a manual mapping is needed."""
        return bool(self.missing_columns)


@dataclass
class ReconcileResult:
    """Outcome of merging imported trades into the journal."""

    merged: list[Trade]
    added: int
    skipped: int
    records: list[Any] = field(default_factory=list)  # full store after a merge

    def to_dict(self) -> dict[str, int]:
        """Convert counters to dictionary."""
        return {"added": self.added, "skipped": self.skipped, "total": len(self.merged)}
