"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of the transaction history.
"""

import io
from datetime import date
from typing import Optional

import pandas as pd

from analytics.history import SORT_DATE_DESC, filter_and_sort
from models.transaction import Transaction
from services.transaction_service import TransactionService
from utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = ["Date", "Type", "Description", "Category", "Amount", "Signed Amount"]


def _rows(transactions: list[Transaction]) -> list[dict]:
    return [
        {
            "Date": t.date.strftime("%Y-%m-%d %H:%M"),
            "Type": t.type.title(),
            "Description": t.description,
            "Category": t.category,
            "Amount": t.amount,
            "Signed Amount": t.signed_amount,
        }
        for t in transactions
    ]


class ExportService:
    """Generates downloadable transaction reports in CSV and Excel formats."""

    def __init__(self, transaction_service: Optional[TransactionService] = None):
        self.transaction_service = transaction_service or TransactionService()

    def _frame(self, start_date: Optional[date], end_date: Optional[date], sort: str) -> pd.DataFrame:
        transactions = filter_and_sort(
            self.transaction_service.list_transactions(), start_date, end_date, sort
        )
        return pd.DataFrame(_rows(transactions), columns=COLUMNS)

    def export_csv(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        sort: str = SORT_DATE_DESC,
    ) -> io.BytesIO:
        """
        Export the filtered history as a CSV file.

        Args:
            start_date: Inclusive first day, or None for no lower bound.
            end_date: Inclusive last day, or None for no upper bound.
            sort: One of the history sort options.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self._frame(start_date, end_date, sort)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} transactions as CSV")
        return buffer

    def export_excel(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        sort: str = SORT_DATE_DESC,
    ) -> io.BytesIO:
        """
        Export the filtered history as an Excel (.xlsx) file with a
        Transactions sheet and, when there is data, a per-category Summary sheet.
        """
        df = self._frame(start_date, end_date, sort)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Transactions", index=False)

            if not df.empty:
                summary = (
                    df.pivot_table(index="Category", columns="Type", values="Amount",
                                   aggfunc="sum", fill_value=0.0)
                    .reset_index()
                )
                summary.columns.name = None
                summary.to_excel(writer, sheet_name="Summary", index=False)

        buffer.seek(0)
        logger.info(f"Exported {len(df)} transactions as Excel")
        return buffer
