"""
Unit tests for the manual mapping fallback.
"""

from unittest.mock import patch

import pytest

from tradelog.core.enums import MappingField
from tradelog.core.exceptions.journal import MappingIncompleteError
from tradelog.core.models.column_mapping import UNMAPPED, ColumnMapping
from tradelog.infrastructure.csv_import.mapping_resolver import ColumnMappingResolver

HEADERS = ["Ticker", "Dir", "In", "Out", "Qty", "Result"]
CONTENT = "Ticker,Dir,In,Out,Qty,Result\nEURUSD,Buy,1.1,1.105,1,10\nUSDJPY,Sell,150,149.5,2,\n"
FULL_MAPPING = {"symbol": 0, "side": 1, "openPrice": 2, "closePrice": 3, "quantity": 4, "pnl": 5}


@pytest.fixture
def resolver(parser) -> ColumnMappingResolver:
    return ColumnMappingResolver(parser)


class TestColumnMappingResolver:
    """Test suite for ColumnMappingResolver."""

    def test_should_suggest_partial_mapping(self, resolver) -> None:
        """Test the pre-filled suggestion keeps unmatched fields at -1."""
        suggestion = resolver.guess_mapping(HEADERS)

        assert suggestion[MappingField.SIDE] == 1
        assert suggestion[MappingField.QUANTITY] == UNMAPPED

    def test_should_confirm_complete_mapping(self, resolver) -> None:
        """Test a full mapping is accepted."""
        mapping = ColumnMapping.from_dict(FULL_MAPPING)
        assert resolver.confirm_mapping(mapping, HEADERS) is mapping

    def test_should_reject_mapping_with_unmapped_field(self, resolver) -> None:
        """Test confirmation fails on a -1 required field."""
        mapping = ColumnMapping.from_dict({**FULL_MAPPING, "quantity": UNMAPPED})

        with pytest.raises(MappingIncompleteError) as exc_info:
            resolver.confirm_mapping(mapping, HEADERS)

        assert exc_info.value.unmapped == ["quantity"]

    def test_should_resolve_file_with_confirmed_mapping(self, resolver) -> None:
        """Test the file is re-parsed into candidates."""
        result = resolver.resolve(CONTENT, ColumnMapping.from_dict(FULL_MAPPING))

        assert result.success is True
        assert [c.symbol for c in result.trades] == ["EURUSD", "USDJPY"]
        assert result.trades[1].pnl is None

    def test_should_not_parse_when_mapping_is_rejected(self, resolver) -> None:
        """Test rejection happens before parsing."""
        with patch.object(resolver.parser, "parse_with_mappings") as mock_parse:
            with pytest.raises(MappingIncompleteError):
                resolver.resolve(CONTENT, ColumnMapping.from_dict({"symbol": 0}))

        mock_parse.assert_not_called()
