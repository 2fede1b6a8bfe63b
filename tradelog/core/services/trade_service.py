"""
Trade journal service.

Direct single-trade entry: every create and edit runs the P&L calculator
so the outcome fields stay a function of the trade's inputs.
"""

import uuid
from dataclasses import replace

from loguru import logger

from tradelog.core.exceptions.journal import TradeNotFoundError
from tradelog.core.interfaces.repository import ITradeRepository
from tradelog.core.models.trade import Trade
from tradelog.core.pricing.pnl_calculator import PnLCalculator
from tradelog.core.utils.decorators import log_operation, validate_inputs


class TradeService:
    """Create, edit, delete and list trades against a repository."""

    def __init__(
        self, repository: ITradeRepository, calculator: PnLCalculator | None = None
    ) -> None:
        self.repository = repository
        self.calculator = calculator or PnLCalculator()

    @validate_inputs
    def list_trades(self, account_id: str | None = None) -> list[Trade]:
        """List trades, optionally restricted to one account."""
        trades = self.repository.load()
        if account_id is None:
            return trades
        return [trade for trade in trades if trade.account_id == account_id]

    def get_trade(self, trade_id: str) -> Trade:
        """Get a trade by id.

        Raises:
            TradeNotFoundError: If no trade has this id
        """
        for trade in self.repository.load():
            if trade.id == trade_id:
                return trade
        raise TradeNotFoundError(trade_id)

    @log_operation
    def create_trade(self, trade: Trade) -> Trade:
        """Calculate and store a new trade. A missing id is generated."""
        calculated = self.calculator.apply(trade)
        if not calculated.id:
            calculated = replace(calculated, id=uuid.uuid4().hex, tags=list(calculated.tags))

        self.repository.add(calculated)
        logger.debug(f"Created trade {calculated.id} {calculated.symbol} pnl={calculated.pnl}")
        return calculated

    @log_operation
    def update_trade(self, trade_id: str, trade: Trade) -> Trade:
        """Recalculate and replace an existing trade, keeping its id.

        Raises:
            TradeNotFoundError: If no trade has this id
        """
        updated = self.calculator.apply(replace(trade, id=trade_id, tags=list(trade.tags)))
        self.repository.update(updated)
        return updated

    @log_operation
    def delete_trade(self, trade_id: str) -> None:
        """Delete a trade.

        Raises:
            TradeNotFoundError: If no trade has this id
        """
        self.repository.delete(trade_id)

