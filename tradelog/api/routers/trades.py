"""
Trade journal API endpoints.
"""

from datetime import UTC, date, datetime
from typing import Any

from fastapi import APIRouter, Depends, Query, Response

from tradelog.api.deps import get_trade_service
from tradelog.api.schemas.api_models import TradeRequest
from tradelog.core.enums import ReportPeriod
from tradelog.core.pricing.pnl_calculator import PnLCalculator
from tradelog.core.services.trade_service import TradeService
from tradelog.infrastructure.export import ReportGenerator, export_trades_csv

router = APIRouter()

_calculator = PnLCalculator()


def _csv_response(content: str, filename_prefix: str) -> Response:
    filename = f"{filename_prefix}_{datetime.now(UTC).strftime('%Y-%m-%d')}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("")
def list_trades(
    account_id: str | None = None,
    service: TradeService = Depends(get_trade_service),
) -> dict[str, Any]:
    """List journal trades, optionally for one account."""
    trades = service.list_trades(account_id)
    return {"trades": [trade.to_dict() for trade in trades], "count": len(trades)}


@router.post("", status_code=201)
def create_trade(
    request: TradeRequest, service: TradeService = Depends(get_trade_service)
) -> dict[str, Any]:
    """Record a trade; P&L, percentage and risk-reward are calculated."""
    return service.create_trade(request.to_trade()).to_dict()


@router.post("/calculate")
def calculate_trade(request: TradeRequest) -> dict[str, float]:
    """Preview the calculated outcome of a trade without storing it."""
    return _calculator.calculate(request.to_trade()).to_dict()


@router.get("/export")
def export_trades(
    account_id: str | None = None,
    service: TradeService = Depends(get_trade_service),
) -> Response:
    """Download trades as CSV."""
    return _csv_response(export_trades_csv(service.list_trades(account_id)), "trades")


@router.get("/report", response_model=None)
def trading_report(
    period: ReportPeriod = ReportPeriod.MONTHLY,
    start: date | None = None,
    end: date | None = None,
    account_id: str | None = None,
    output: str = Query(default="json", alias="format"),
    service: TradeService = Depends(get_trade_service),
) -> dict[str, Any] | Response:
    """Generate a performance report as JSON, or as CSV with format=csv."""
    report = ReportGenerator().generate(
        service.list_trades(account_id), period=period, start=start, end=end
    )
    if output == "csv":
        return _csv_response(report.to_csv(), "trading_report")
    return report.to_dict()


@router.get("/{trade_id}")
def get_trade(
    trade_id: str, service: TradeService = Depends(get_trade_service)
) -> dict[str, Any]:
    """Get a single trade."""
    return service.get_trade(trade_id).to_dict()


@router.put("/{trade_id}")
def update_trade(
    trade_id: str,
    request: TradeRequest,
    service: TradeService = Depends(get_trade_service),
) -> dict[str, Any]:
    """Replace a trade's inputs; its outcome is recalculated."""
    return service.update_trade(trade_id, request.to_trade(trade_id)).to_dict()


@router.delete("/{trade_id}", status_code=204)
def delete_trade(
    trade_id: str, service: TradeService = Depends(get_trade_service)
) -> Response:
    """Delete a trade."""
    service.delete_trade(trade_id)
    return Response(status_code=204)
