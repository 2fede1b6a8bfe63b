"""
Unit tests for the contract specification table.
"""

import pytest

from tradelog.core.enums import Market
from tradelog.core.pricing.contract_specs import (
    FUTURES_POINT_VALUE_RULES,
    futures_point_value,
    is_two_decimal_quote,
    normalize_symbol,
    resolve_contract_spec,
)


class TestFuturesPointValue:
    """Tests for the ordered futures point value rules."""

    @pytest.mark.parametrize(
        ("symbol", "expected"),
        [
            ("ES", 50.0),
            ("ESZ24", 50.0),
            ("MES", 5.0),
            ("MESU5", 5.0),
            ("NQ", 20.0),
            ("MNQU5", 2.0),
            ("YM", 5.0),
            ("MYM", 0.5),
            ("RTY", 50.0),
            ("M2K", 5.0),
            ("GC", 100.0),
            ("MGC", 10.0),
            ("CL", 1000.0),
            ("MCL", 100.0),
            ("M6E", 1250.0),
            ("M6B", 625.0),
        ],
    )
    def test_should_resolve_known_roots(self, symbol: str, expected: float) -> None:
        """Test point values of standard and micro contracts."""
        assert futures_point_value(symbol) == expected

    def test_should_check_micro_contracts_before_standard_ones(self) -> None:
        """Test that micro roots precede the standard roots they contain."""
        roots = [root for root, _matches, _value in FUTURES_POINT_VALUE_RULES]
        assert roots.index("MES") < roots.index("ES")
        assert roots.index("MNQ") < roots.index("NQ")
        assert roots.index("MCL") < roots.index("CL")

    def test_should_default_unknown_symbols_to_one(self) -> None:
        """Test that unknown futures are valued at one per point."""
        assert futures_point_value("ZZZ") == 1.0

    def test_should_ignore_case_and_separators(self) -> None:
        """Test that broker prefixes such as /ES resolve."""
        assert futures_point_value("/es") == 50.0


class TestSymbolHelpers:
    """Tests for symbol normalization helpers."""

    def test_should_normalize_symbol(self) -> None:
        """Test uppercase and separator stripping."""
        assert normalize_symbol(" eur/usd ") == "EURUSD"

    def test_should_detect_two_decimal_quotes(self) -> None:
        """Test JPY and HUF pairs are treated as two-decimal quotes."""
        assert is_two_decimal_quote("USDJPY") is True
        assert is_two_decimal_quote("EURHUF") is True
        assert is_two_decimal_quote("EURUSD") is False


class TestResolveContractSpec:
    """Tests for multiplier and spread cost resolution."""

    def test_should_scale_forex_multiplier_with_lot_size(self) -> None:
        """Test standard forex lots of 100000 units."""
        spec = resolve_contract_spec(Market.FOREX, "EURUSD", 1.0)

        assert spec.multiplier == 100000.0
        assert spec.spread_cost(1.0) == 10.0

    def test_should_use_thousand_units_for_jpy_pairs(self) -> None:
        """Test two-decimal pairs with a fixed $10 pip value."""
        spec = resolve_contract_spec(Market.FOREX, "USDJPY", 2.0)

        assert spec.multiplier == 2000.0
        assert spec.spread_cost(2.0) == 40.0

    def test_should_not_scale_futures_multiplier_with_lot_size(self) -> None:
        """Test the per-contract futures multiplier; lot size only reaches spread cost."""
        one_contract = resolve_contract_spec(Market.FUTURES, "ES", 1.0)
        two_contracts = resolve_contract_spec(Market.FUTURES, "ES", 2.0)

        assert one_contract.multiplier == two_contracts.multiplier == 50.0
        assert two_contracts.spread_cost(0.25) == 25.0

    def test_should_value_indices_at_one_per_point(self) -> None:
        """Test indices use a unit multiplier."""
        spec = resolve_contract_spec(Market.INDICES, "US30", 3.0)

        assert spec.multiplier == 1.0
        assert spec.spread_cost(2.0) == 6.0

    def test_should_apply_custom_multiplier_override(self) -> None:
        """Test that a positive custom multiplier replaces the table value."""
        spec = resolve_contract_spec(Market.FUTURES, "ES", 2.0, custom_multiplier=10.0)

        assert spec.multiplier == 10.0
        assert spec.spread_cost(1.0) == 20.0

    def test_should_ignore_non_positive_custom_multiplier(self) -> None:
        """Test that zero falls back to the table."""
        spec = resolve_contract_spec(Market.FUTURES, "NQ", 1.0, custom_multiplier=0.0)
        assert spec.multiplier == 20.0

    def test_should_accept_market_as_string(self) -> None:
        """Test string markets are coerced."""
        assert resolve_contract_spec("futures", "GC", 1.0).multiplier == 100.0
