"""
handlers/spending_limit_handler.py
----------------------------------
REST endpoints for spending limits under /api/spending-limits.
"""

from fastapi import APIRouter, Depends, Response

from handlers.dependencies import get_spending_limit_service
from models.schemas import SpendingLimitIn
from services.spending_limit_service import SpendingLimitService

router = APIRouter(prefix="/api/spending-limits", tags=["spending-limits"])


@router.get("")
def list_limits(service: SpendingLimitService = Depends(get_spending_limit_service)):
    return [limit.to_dict() for limit in service.list_limits()]


@router.get("/{period}")
def get_limit_for_period(period: str, service: SpendingLimitService = Depends(get_spending_limit_service)):
    """The 'Total' limit for the period, or the configured default when none is saved."""
    return service.get_for_period(period).to_dict()


@router.post("", status_code=201)
def set_limit(body: SpendingLimitIn, service: SpendingLimitService = Depends(get_spending_limit_service)):
    return service.set_limit(body.model_dump(exclude_unset=True)).to_dict()


@router.put("/{limit_id}")
def update_limit(
    limit_id: str,
    body: SpendingLimitIn,
    service: SpendingLimitService = Depends(get_spending_limit_service),
):
    return service.update_limit(limit_id, body.model_dump(exclude_unset=True)).to_dict()


@router.delete("/{limit_id}", status_code=204)
def delete_limit(limit_id: str, service: SpendingLimitService = Depends(get_spending_limit_service)):
    service.delete_limit(limit_id)
    return Response(status_code=204)
