"""
Report period enumeration.
"""

from enum import StrEnum


class ReportPeriod(StrEnum):
    """Date windows a performance report can cover."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"

    @property
    def pandas_frequency(self) -> str | None:
        """Get the pandas period frequency for calendar-aligned periods."""
        frequencies = {
            self.MONTHLY: "M",
            self.QUARTERLY: "Q",
            self.YEARLY: "Y",
        }
        return frequencies.get(self)
