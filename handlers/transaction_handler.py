"""
handlers/transaction_handler.py
-------------------------------
REST endpoints for transactions under /api/transactions.
Delegates to TransactionService; bulk deletion goes through the refresh controller.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from analytics.history import SORT_DATE_DESC, filter_and_sort
from handlers.dependencies import get_refresh_controller, get_transaction_service
from models.schemas import BulkDeleteIn, TransactionIn
from services.transaction_service import TransactionService
from sync.refresh_controller import RefreshController

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("")
def list_transactions(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    sort: str = Query(SORT_DATE_DESC),
    service: TransactionService = Depends(get_transaction_service),
):
    """All transactions, newest first unless a history filter or sort is given."""
    transactions = service.list_transactions()
    if start_date or end_date or sort != SORT_DATE_DESC:
        transactions = filter_and_sort(transactions, start_date, end_date, sort)
    return [t.to_dict() for t in transactions]


@router.post("", status_code=201)
def create_transaction(body: TransactionIn, service: TransactionService = Depends(get_transaction_service)):
    return service.create_transaction(body.model_dump(exclude_unset=True)).to_dict()


@router.post("/bulk-delete")
async def bulk_delete(body: BulkDeleteIn, controller: RefreshController = Depends(get_refresh_controller)):
    result = await controller.delete_transactions(body.ids)
    return result.to_dict()


@router.get("/{transaction_id}")
def get_transaction(transaction_id: str, service: TransactionService = Depends(get_transaction_service)):
    return service.get_transaction(transaction_id).to_dict()


@router.put("/{transaction_id}")
def update_transaction(
    transaction_id: str,
    body: TransactionIn,
    service: TransactionService = Depends(get_transaction_service),
):
    return service.update_transaction(transaction_id, body.model_dump(exclude_unset=True)).to_dict()


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: str, service: TransactionService = Depends(get_transaction_service)):
    service.delete_transaction(transaction_id)
    return Response(status_code=204)
