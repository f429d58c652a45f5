"""
handlers/savings_handler.py
---------------------------
REST endpoints for savings plans under /api/savings-plans, including
contributions ("add money") and the progress chart.
"""

from fastapi import APIRouter, Depends, Response

from analytics.savings import savings_overview
from handlers.dependencies import get_chart_service, get_savings_service
from models.schemas import ContributionIn, SavingsPlanIn
from services.chart_service import ChartService
from services.savings_service import SavingsService
from utils.errors import NotFoundError

router = APIRouter(prefix="/api/savings-plans", tags=["savings"])


@router.get("")
def list_plans(service: SavingsService = Depends(get_savings_service)):
    return [p.to_dict() for p in service.list_plans()]


@router.post("", status_code=201)
def create_plan(body: SavingsPlanIn, service: SavingsService = Depends(get_savings_service)):
    return service.create_plan(body.model_dump(exclude_unset=True)).to_dict()


@router.get("/chart")
def savings_chart(
    service: SavingsService = Depends(get_savings_service),
    charts: ChartService = Depends(get_chart_service),
):
    buf = charts.savings_progress(savings_overview(service.list_plans()))
    if buf is None:
        raise NotFoundError("No savings plans to chart")
    return Response(content=buf.getvalue(), media_type="image/png")


@router.get("/{plan_id}")
def get_plan(plan_id: str, service: SavingsService = Depends(get_savings_service)):
    return service.get_plan(plan_id).to_dict()


@router.put("/{plan_id}")
def update_plan(plan_id: str, body: SavingsPlanIn, service: SavingsService = Depends(get_savings_service)):
    return service.update_plan(plan_id, body.model_dump(exclude_unset=True)).to_dict()


@router.delete("/{plan_id}")
def delete_plan(plan_id: str, service: SavingsService = Depends(get_savings_service)):
    service.delete_plan(plan_id)
    return {"message": "Savings plan deleted successfully"}


@router.post("/{plan_id}/contributions", status_code=201)
def add_money(plan_id: str, body: ContributionIn, service: SavingsService = Depends(get_savings_service)):
    """Add money to a plan; also records a 'Savings' expense transaction."""
    return service.add_money(plan_id, body.amount).to_dict()
