"""
Core enumerations for the trade journal.

This module provides centralized enumerations for domain concepts
like markets, trade sides, import states and report periods.
"""

from .import_states import ImportState
from .mapping_fields import MappingField
from .markets import Market
from .position_types import Side
from .report_periods import ReportPeriod

__all__ = ["Market", "Side", "MappingField", "ImportState", "ReportPeriod"]
