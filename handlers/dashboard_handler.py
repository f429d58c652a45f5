"""
handlers/dashboard_handler.py
-----------------------------
Read-only derived views: the dashboard snapshot, combined search and the
expense analysis (JSON and PNG).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request, Response

from analytics.aggregation import expense_analysis
from analytics.windows import WEEKLY
from handlers.dependencies import (
    get_chart_service,
    get_clock,
    get_refresh_controller,
    get_transaction_service,
    require_chart_period,
    require_period,
)
from services.chart_service import ChartService
from services.transaction_service import TransactionService
from sync.refresh_controller import RefreshController
from utils.clock import Clock

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard")
async def dashboard(
    period: str = Query(WEEKLY),
    chart_period: str = Query(WEEKLY, alias="chartPeriod"),
    controller: RefreshController = Depends(get_refresh_controller),
):
    """Re-fetch every list, then derive all dashboard cards from that one snapshot."""
    require_period(period)
    require_chart_period(chart_period)
    await controller.refresh()
    return controller.dashboard(period, chart_period).to_dict()


@router.get("/search")
async def search(
    request: Request,
    q: str = Query(""),
    client_id: Optional[str] = Header(None, alias="X-Client-Id"),
    controller: RefreshController = Depends(get_refresh_controller),
):
    """
    Search-as-you-type. Queries are debounced per client (the X-Client-Id
    header, else the caller's address); a query overtaken by a newer one from
    the same client gets 204 No Content.
    """
    client_key = client_id or (request.client.host if request.client else "anonymous")
    result = await controller.debounced_search(q, client_key)
    if result is None:
        return Response(status_code=204)
    return result.to_dict()


@router.get("/analysis/{period}")
def analysis(
    period: str,
    service: TransactionService = Depends(get_transaction_service),
    clock: Clock = Depends(get_clock),
):
    require_chart_period(period)
    return expense_analysis(service.list_transactions(), period, clock()).to_dict()


@router.get("/analysis/{period}/chart")
def analysis_chart(
    period: str,
    service: TransactionService = Depends(get_transaction_service),
    charts: ChartService = Depends(get_chart_service),
    clock: Clock = Depends(get_clock),
):
    require_chart_period(period)
    result = expense_analysis(service.list_transactions(), period, clock())
    buf = charts.expense_bar(result)
    return Response(content=buf.getvalue(), media_type="image/png")
