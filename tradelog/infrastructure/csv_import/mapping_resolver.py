"""
Manual column mapping fallback.
"""

from loguru import logger

from tradelog.core.models.column_mapping import ColumnMapping
from tradelog.core.models.import_result import ParseResult

from . import column_aliases
from .csv_parser import TradeCSVParser


class ColumnMappingResolver:
    """Proposes and validates a user mapping when column detection fails."""

    def __init__(self, parser: TradeCSVParser | None = None) -> None:
        self.parser = parser or TradeCSVParser()

    @staticmethod
    def guess_mapping(headers: list[str]) -> ColumnMapping:
        """Pre-fill a mapping from the alias dictionary; unmatched fields stay -1."""
        mapping = column_aliases.guess_mapping(headers)
        logger.debug(f"Suggested mapping for {headers}: {mapping.to_dict()}")
        return mapping

    @staticmethod
    def confirm_mapping(mapping: ColumnMapping, headers: list[str] | None = None) -> ColumnMapping:
        """
        Accept a user mapping.

        Args:
            mapping: Field to column assignment chosen by the user
            headers: Header row, to reject indices past its end

        Raises:
            MappingIncompleteError: If a required field is unmapped or a
                column index does not exist
        """
        column_count = len(headers) if headers is not None else None
        return column_aliases.validate_mapping(mapping, column_count)

    def resolve(self, content: str, mapping: ColumnMapping) -> ParseResult:
        """Validate the mapping, then re-parse the file with it.

        Nothing is parsed when the mapping is rejected.
        """
        self.confirm_mapping(mapping)
        logger.info(f"Re-parsing with confirmed mapping {mapping.to_dict()}")
        return self.parser.parse_with_mappings(content, mapping)
