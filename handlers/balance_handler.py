"""
handlers/balance_handler.py
---------------------------
POST /api/balance/adjust: move the running balance to a user-entered value.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from handlers.dependencies import get_transaction_service
from models.schemas import BalanceAdjustIn
from services.transaction_service import TransactionService

router = APIRouter(prefix="/api/balance", tags=["balance"])


@router.post("/adjust")
def adjust_balance(body: BalanceAdjustIn, service: TransactionService = Depends(get_transaction_service)):
    adjustment = service.adjust_balance(body.new_balance)
    if adjustment is None:
        return JSONResponse(status_code=200, content={"message": "Balance already at requested value"})
    return JSONResponse(
        status_code=201,
        content={"message": "Balance adjusted successfully", "transaction": adjustment.to_dict()},
    )
