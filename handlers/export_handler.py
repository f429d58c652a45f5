"""
handlers/export_handler.py
---------------------------
Handles data export downloads (CSV, Excel).
Delegates to ExportService.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from analytics.history import SORT_DATE_DESC
from handlers.dependencies import get_transaction_service
from services.export_service import ExportService
from services.transaction_service import TransactionService
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/export", tags=["export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/transactions.csv")
def export_csv(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    sort: str = Query(SORT_DATE_DESC),
    service: TransactionService = Depends(get_transaction_service),
):
    """Download the (optionally filtered) history as CSV."""
    buffer = ExportService(service).export_csv(start_date, end_date, sort)
    return Response(
        content=buffer.getvalue(),
        media_type="text/csv",
        headers=_attachment("transactions.csv"),
    )


@router.get("/transactions.xlsx")
def export_excel(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    sort: str = Query(SORT_DATE_DESC),
    service: TransactionService = Depends(get_transaction_service),
):
    """Download the (optionally filtered) history as an Excel workbook."""
    buffer = ExportService(service).export_excel(start_date, end_date, sort)
    return Response(
        content=buffer.getvalue(),
        media_type=XLSX_MEDIA_TYPE,
        headers=_attachment("transactions.xlsx"),
    )
