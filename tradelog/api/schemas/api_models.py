"""
Pydantic schemas for API request/response models.
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from tradelog.core.constants import DEFAULT_ACCOUNT_ID
from tradelog.core.enums import MappingField, Market, Side
from tradelog.core.models.column_mapping import ColumnMapping
from tradelog.core.models.trade import Trade, parse_timestamp


class TradeRequest(BaseModel):
    """Request model for manual trade entry and edits."""

    symbol: str = Field(..., min_length=1, description="Instrument symbol, e.g. EURUSD or ESZ24")
    side: Side = Field(..., description="Trade direction")
    market: Market = Field(default=Market.FOREX, description="Market the instrument trades on")
    account_id: str = Field(default=DEFAULT_ACCOUNT_ID, min_length=1)
    entry_price: float = Field(..., gt=0, description="Entry price")
    exit_price: float = Field(..., gt=0, description="Exit price")
    lot_size: float = Field(..., gt=0, description="Lots or contracts")
    entry_time: datetime
    exit_time: datetime
    stop_loss: float | None = Field(default=None, gt=0)
    take_profit: float | None = Field(default=None, gt=0)
    spread: float = Field(default=0.0, ge=0, description="Spread in pips or points")
    commission: float = Field(default=0.0, ge=0)
    swap: float = 0.0
    custom_multiplier: float | None = Field(default=None, gt=0)
    use_manual_pnl: bool = False
    manual_pnl: float | None = None
    strategy: str = ""
    notes: str = ""
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_manual_pnl(self) -> "TradeRequest":
        """Validate that the manual override carries an amount."""
        if self.use_manual_pnl and self.manual_pnl is None:
            raise ValueError("manual_pnl is required when use_manual_pnl is set")
        return self

    def to_trade(self, trade_id: str = "") -> Trade:
        """Convert request to a domain trade."""
        return Trade(
            id=trade_id,
            symbol=self.symbol.strip(),
            side=self.side,
            market=self.market,
            account_id=self.account_id,
            entry_price=self.entry_price,
            exit_price=self.exit_price,
            lot_size=self.lot_size,
            entry_time=parse_timestamp(self.entry_time),
            exit_time=parse_timestamp(self.exit_time),
            stop_loss=self.stop_loss,
            take_profit=self.take_profit,
            spread=self.spread,
            commission=self.commission,
            swap=self.swap,
            custom_multiplier=self.custom_multiplier,
            use_manual_pnl=self.use_manual_pnl,
            manual_pnl=self.manual_pnl,
            strategy=self.strategy,
            notes=self.notes,
            tags=list(self.tags),
        )


class ColumnMappingRequest(BaseModel):
    """Request model for a user-confirmed column mapping."""

    mapping: dict[MappingField, int] = Field(
        ..., description="Field name to 0-based column index; -1 leaves a field unmapped"
    )

    def to_mapping(self) -> ColumnMapping:
        """Convert request to a column mapping; omitted fields are unmapped."""
        return ColumnMapping(dict(self.mapping))

