"""
Trade domain model.

A Trade is the persisted unit of the journal. Outcome fields (pnl,
pnl_percentage, risk_reward) are derived by the P&L calculator and never
edited directly except through the manual P&L override.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from tradelog.core.constants import DEFAULT_ACCOUNT_ID
from tradelog.core.enums import Market, Side
from tradelog.core.exceptions.journal import ValidationError
from tradelog.core.types.financial import ZERO


@dataclass(frozen=True)
class TradeOutcome:
    """Result of a P&L calculation."""

    pnl: float
    pnl_percentage: float
    risk_reward: float
    gross_pnl: float = ZERO
    spread_cost: float = ZERO
    multiplier: float = ZERO

    def to_dict(self) -> dict[str, float]:
        """Convert outcome to dictionary."""
        return {
            "pnl": self.pnl,
            "pnlPercentage": self.pnl_percentage,
            "riskReward": self.risk_reward,
            "grossPnL": self.gross_pnl,
            "spreadCost": self.spread_cost,
            "multiplier": self.multiplier,
        }


@dataclass
class Trade:
    """Represents a closed trade in the journal."""

    id: str
    symbol: str
    side: Side
    entry_price: float
    exit_price: float
    lot_size: float
    entry_time: datetime
    exit_time: datetime
    market: Market = Market.FOREX
    account_id: str = DEFAULT_ACCOUNT_ID
    stop_loss: float | None = None
    take_profit: float | None = None
    spread: float = ZERO
    commission: float = ZERO
    swap: float = ZERO
    custom_multiplier: float | None = None
    pnl: float = ZERO
    pnl_percentage: float = ZERO
    risk_reward: float = ZERO
    use_manual_pnl: bool = False
    manual_pnl: float | None = None
    strategy: str = ""
    notes: str = ""
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate and normalize trade data after initialization."""
        self.side = Side(self.side)
        self.market = Market(self.market)
        self.account_id = self.account_id or DEFAULT_ACCOUNT_ID

        if not self.symbol or not self.symbol.strip():
            raise ValidationError("Symbol cannot be empty")
        if self.lot_size <= ZERO:
            raise ValidationError(f"Lot size must be positive, got {self.lot_size}")
        if self.use_manual_pnl and self.manual_pnl is None:
            raise ValidationError("Manual P&L is required when the manual override is enabled")

    def with_outcome(self, outcome: TradeOutcome) -> "Trade":
        """Return a copy carrying the given calculation outcome."""
        return replace(
            self,
            pnl=outcome.pnl,
            pnl_percentage=outcome.pnl_percentage,
            risk_reward=outcome.risk_reward,
            tags=list(self.tags),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert trade to its persisted JSON shape."""
        return {
            "id": self.id,
            "accountId": self.account_id,
            "symbol": self.symbol,
            "market": self.market.value,
            "side": self.side.value,
            "entryPrice": self.entry_price,
            "exitPrice": self.exit_price,
            "stopLoss": self.stop_loss,
            "takeProfit": self.take_profit,
            "lotSize": self.lot_size,
            "entryTime": format_timestamp(self.entry_time),
            "exitTime": format_timestamp(self.exit_time),
            "spread": self.spread,
            "commission": self.commission,
            "swap": self.swap,
            "customMultiplier": self.custom_multiplier,
            "pnl": self.pnl,
            "pnlPercentage": self.pnl_percentage,
            "riskReward": self.risk_reward,
            "useManualPnL": self.use_manual_pnl,
            "manualPnL": self.manual_pnl,
            "strategy": self.strategy,
            "notes": self.notes,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Trade":
        """Build a trade from its persisted JSON shape.

        Older records may carry ``quantity`` instead of ``lotSize`` and
        lack ``accountId`` or ``market``.

        Raises:
            ValidationError: If required fields are missing or malformed
        """
        try:
            lot_size = data.get("lotSize") or data.get("quantity") or 1
            return cls(
                id=str(data["id"]),
                account_id=data.get("accountId") or DEFAULT_ACCOUNT_ID,
                symbol=data["symbol"],
                market=Market.from_string(data.get("market")),
                side=Side(data["side"]),
                entry_price=float(data["entryPrice"]),
                exit_price=float(data["exitPrice"]),
                stop_loss=_optional_float(data.get("stopLoss")),
                take_profit=_optional_float(data.get("takeProfit")),
                lot_size=float(lot_size),
                entry_time=parse_timestamp(data["entryTime"]),
                exit_time=parse_timestamp(data["exitTime"]),
                spread=float(data.get("spread") or ZERO),
                commission=float(data.get("commission") or ZERO),
                swap=float(data.get("swap") or ZERO),
                custom_multiplier=_optional_float(data.get("customMultiplier")),
                pnl=float(data.get("pnl") or ZERO),
                pnl_percentage=float(data.get("pnlPercentage") or ZERO),
                risk_reward=float(data.get("riskReward") or ZERO),
                use_manual_pnl=bool(data.get("useManualPnL", False)),
                manual_pnl=_optional_float(data.get("manualPnL")),
                strategy=data.get("strategy") or "",
                notes=data.get("notes") or "",
                tags=list(data.get("tags") or []),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid trade record {data.get('id', '?')}: {e}") from e


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse a stored timestamp into a naive UTC datetime.

    Accepts ISO-8601 strings with or without offset, including the
    ``Z`` suffix written by JavaScript clients.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Render a timestamp like JavaScript's toISOString: UTC, milliseconds, ``Z``.

    Examples:
        >>> format_timestamp(datetime(2025, 8, 28, 10, 0))
        '2025-08-28T10:00:00.000Z'
    """
    utc = parse_timestamp(value)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def stored_account_id(record: Any) -> str | None:
    """Get the account of a raw stored record.

    Records without ``accountId`` belong to the default account; values that
    are not JSON objects belong to none.
    """
    if not isinstance(record, dict):
        return None
    return record.get("accountId") or DEFAULT_ACCOUNT_ID


def epoch_millis(value: datetime) -> int:
    """Get epoch milliseconds, reading naive datetimes as UTC."""
    aware = value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    return round(aware.timestamp() * 1000)


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)
