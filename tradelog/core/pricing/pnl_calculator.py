"""
Trade P&L calculator.

Derives gross and net P&L, percentage return and risk-reward ratio from a
trade's raw parameters and the contract specification table. The calculator
is pure: identical inputs always give identical outcomes, and degenerate
geometry (no stop, zero investment) resolves to 0 instead of raising.
"""

from tradelog.core.constants import STANDARD_LOT_UNITS
from tradelog.core.enums import Market, Side
from tradelog.core.models.trade import Trade, TradeOutcome
from tradelog.core.protocols import PricedTrade
from tradelog.core.types.financial import (
    HUNDRED,
    ZERO,
    calculate_gross_pnl,
    round_amount,
    round_percentage,
    safe_divide,
)

from .contract_specs import ContractSpec, resolve_contract_spec


class PnLCalculator:
    """Contract-aware P&L calculator.

    Two paths exist:
    - formula: net P&L from the price move, multiplier and costs; risk-reward
      from the planned stop and target
    - manual override: P&L taken verbatim from ``manual_pnl``; risk-reward
      from the realized move against the stop
    """

    def calculate(self, trade: PricedTrade) -> TradeOutcome:
        """Calculate the outcome fields for a trade.

        Args:
            trade: Any object exposing the PricedTrade fields

        Returns:
            TradeOutcome with pnl, pnl_percentage and risk_reward
        """
        spec = self.contract_spec(trade)
        investment = self.investment(trade, spec)

        if trade.use_manual_pnl and trade.manual_pnl is not None:
            return self._manual_outcome(trade, spec, investment)

        gross_pnl = calculate_gross_pnl(
            entry_price=trade.entry_price,
            exit_price=trade.exit_price,
            multiplier=spec.multiplier,
            side=Side(trade.side).value,
        )
        spread_cost = spec.spread_cost(trade.spread)
        pnl = round_amount(gross_pnl - trade.commission - trade.swap - spread_cost)

        return TradeOutcome(
            pnl=pnl,
            pnl_percentage=self._percentage(pnl, investment),
            risk_reward=self.planned_risk_reward(trade),
            gross_pnl=round_amount(gross_pnl),
            spread_cost=round_amount(spread_cost),
            multiplier=spec.multiplier,
        )

    def apply(self, trade: Trade) -> Trade:
        """Return a copy of the trade with freshly calculated outcome fields."""
        return trade.with_outcome(self.calculate(trade))

    def contract_spec(self, trade: PricedTrade) -> ContractSpec:
        """Resolve the contract convention for a trade."""
        return resolve_contract_spec(
            market=trade.market,
            symbol=trade.symbol,
            lot_size=trade.lot_size,
            custom_multiplier=trade.custom_multiplier,
        )

    @staticmethod
    def investment(trade: PricedTrade, spec: ContractSpec) -> float:
        """Notional base the percentage return is measured against.

        Forex uses full standard-lot units regardless of quote precision.
        """
        if Market(trade.market) == Market.FOREX:
            units = STANDARD_LOT_UNITS * trade.lot_size
        else:
            units = trade.lot_size * spec.multiplier
        return trade.entry_price * units

    @staticmethod
    def planned_risk_reward(trade: PricedTrade) -> float:
        """Reward-to-risk ratio of the planned stop loss and take profit.

        Returns 0 unless both levels are set and sit on the correct side
        of the entry for the trade's direction.
        """
        if trade.stop_loss is None or trade.take_profit is None:
            return ZERO

        risk = PnLCalculator._risk_distance(trade)
        if Side(trade.side).is_long:
            reward = trade.take_profit - trade.entry_price
        else:
            reward = trade.entry_price - trade.take_profit

        if risk <= ZERO or reward <= ZERO:
            return ZERO
        return reward / risk

    @staticmethod
    def realized_risk_reward(trade: PricedTrade) -> float:
        """Realized move measured in units of the planned risk.

        Used by the manual override path. Returns 0 without a valid stop.
        """
        if trade.stop_loss is None:
            return ZERO

        risk = PnLCalculator._risk_distance(trade)
        if risk <= ZERO:
            return ZERO
        return abs(trade.exit_price - trade.entry_price) / risk

    def _manual_outcome(
        self, trade: PricedTrade, spec: ContractSpec, investment: float
    ) -> TradeOutcome:
        pnl = trade.manual_pnl
        return TradeOutcome(
            pnl=pnl,
            pnl_percentage=self._percentage(pnl, investment),
            risk_reward=self.realized_risk_reward(trade),
            multiplier=spec.multiplier,
        )

    @staticmethod
    def _risk_distance(trade: PricedTrade) -> float:
        if Side(trade.side).is_long:
            return trade.entry_price - trade.stop_loss
        return trade.stop_loss - trade.entry_price

    @staticmethod
    def _percentage(pnl: float, investment: float) -> float:
        if investment <= ZERO:
            return ZERO
        return round_percentage(safe_divide(pnl, investment) * HUNDRED)
