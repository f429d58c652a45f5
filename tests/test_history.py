from datetime import date, datetime

from analytics.history import filter_and_sort
from tests.fakes import tx


TRANSACTIONS = [
    tx("first", 30, date=datetime(2024, 6, 1, 0, 0), id=1),
    tx("second", 10, date=datetime(2024, 6, 5, 23, 59, 59), id=2),
    tx("third", 20, date=datetime(2024, 6, 10, 12, 0), id=3),
]


def _ids(transactions):
    return [t.id for t in transactions]


def test_date_range_is_inclusive_of_whole_days():
    result = filter_and_sort(TRANSACTIONS, date(2024, 6, 1), date(2024, 6, 5))
    assert _ids(result) == [2, 1]


def test_sort_options():
    assert _ids(filter_and_sort(TRANSACTIONS, sort="dateAsc")) == [1, 2, 3]
    assert _ids(filter_and_sort(TRANSACTIONS, sort="amountDesc")) == [1, 3, 2]
    assert _ids(filter_and_sort(TRANSACTIONS, sort="amountAsc")) == [2, 3, 1]
    assert _ids(filter_and_sort(TRANSACTIONS, sort="bogus")) == [3, 2, 1]


def test_open_ended_range():
    assert _ids(filter_and_sort(TRANSACTIONS, start_date=date(2024, 6, 5))) == [3, 2]
    assert _ids(filter_and_sort(TRANSACTIONS, end_date=datetime(2024, 6, 1, 18, 0))) == [1]
