"""
analytics/history.py
--------------------
Date-range filtering and sorting for the transaction history view.
"""

from datetime import date, datetime, time
from typing import Iterable, Optional

from models.transaction import Transaction

SORT_DATE_DESC = "dateDesc"
SORT_DATE_ASC = "dateAsc"
SORT_AMOUNT_DESC = "amountDesc"
SORT_AMOUNT_ASC = "amountAsc"
SORT_OPTIONS = (SORT_DATE_DESC, SORT_DATE_ASC, SORT_AMOUNT_DESC, SORT_AMOUNT_ASC)


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def filter_and_sort(
    transactions: Iterable[Transaction],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    sort: str = SORT_DATE_DESC,
) -> list[Transaction]:
    """
    Keep transactions dated within [start_date 00:00, end_date 23:59:59.999999]
    and order them. Unknown sort options fall back to newest first.
    """
    result = list(transactions)

    if start_date is not None:
        lower = datetime.combine(_as_date(start_date), time.min)
        result = [t for t in result if t.date >= lower]
    if end_date is not None:
        upper = datetime.combine(_as_date(end_date), time.max)
        result = [t for t in result if t.date <= upper]

    if sort == SORT_DATE_ASC:
        result.sort(key=lambda t: t.date)
    elif sort == SORT_AMOUNT_DESC:
        result.sort(key=lambda t: t.amount, reverse=True)
    elif sort == SORT_AMOUNT_ASC:
        result.sort(key=lambda t: t.amount)
    else:
        result.sort(key=lambda t: t.date, reverse=True)
    return result
