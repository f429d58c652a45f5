from datetime import datetime, timedelta, timezone

import pytest

from tests.fakes import NOW, tx
from utils.errors import NotFoundError, ValidationError


def _valid(**overrides):
    data = {"description": "Groceries", "amount": 250, "type": "expense", "category": "Food"}
    data.update(overrides)
    return data


def test_create_defaults_date_to_now(transaction_service):
    created = transaction_service.create_transaction(_valid())
    assert created.id is not None
    assert created.date == NOW
    assert created.amount == 250.0


def test_create_accepts_iso_dates(transaction_service):
    created = transaction_service.create_transaction(_valid(date="2024-06-01"))
    assert created.date == datetime(2024, 6, 1)


def test_create_converts_aware_dates_to_local(transaction_service):
    aware = datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    created = transaction_service.create_transaction(_valid(date=aware))
    assert created.date.tzinfo is None
    assert created.date == aware.astimezone().replace(tzinfo=None)


@pytest.mark.parametrize("field, value, message", [
    ("description", "  ", "Description is required"),
    ("amount", None, "Amount is required"),
    ("amount", "abc", "Amount must be a number"),
    ("amount", -5, "Amount must not be negative"),
    ("type", "transfer", "Type must be either income or expense"),
    ("category", "", "Category is required"),
    ("date", "not a date", "Date must be a valid date"),
])
def test_create_rejects_invalid_fields(transaction_service, transaction_repo, field, value, message):
    with pytest.raises(ValidationError) as exc:
        transaction_service.create_transaction(_valid(**{field: value}))
    assert exc.value.message == message
    assert transaction_repo.rows == {}


def test_partial_update_keeps_other_fields(transaction_service):
    created = transaction_service.create_transaction(_valid())
    updated = transaction_service.update_transaction(str(created.id), {"amount": 300})
    assert updated.amount == 300
    assert updated.description == "Groceries"
    assert updated.date == created.date


def test_update_and_delete_unknown_ids(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.update_transaction("42", {"amount": 1})
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction("42")
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction("not-an-id")


def test_delete(transaction_service, transaction_repo):
    created = transaction_service.create_transaction(_valid())
    transaction_service.delete_transaction(str(created.id))
    assert transaction_repo.rows == {}


def test_adjust_balance_up_creates_income(transaction_service, transaction_repo):
    transaction_repo.add(tx("salary", 1000, "income", "Salary"))

    adjustment = transaction_service.adjust_balance(1500)

    assert adjustment.type == "income"
    assert adjustment.amount == 500
    assert adjustment.category == "Adjustment"
    assert adjustment.description == "Balance Adjustment"
    assert adjustment.date == NOW
    assert transaction_service.current_balance() == 1500


def test_adjust_balance_down_creates_expense(transaction_service, transaction_repo):
    transaction_repo.add(tx("salary", 1000, "income", "Salary"))
    adjustment = transaction_service.adjust_balance(400.25)
    assert adjustment.type == "expense"
    assert adjustment.amount == pytest.approx(599.75)


def test_adjust_balance_noop_when_equal_to_the_cent(transaction_service, transaction_repo):
    transaction_repo.add(tx("salary", 1000, "income", "Salary"))
    assert transaction_service.adjust_balance(1000.001) is None
    assert len(transaction_repo.rows) == 1


def test_adjust_balance_requires_a_number(transaction_service):
    with pytest.raises(ValidationError) as exc:
        transaction_service.adjust_balance("lots")
    assert exc.value.message == "Invalid balance amount"
