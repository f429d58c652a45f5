"""
In-memory stand-ins for the PostgreSQL repositories.

They implement the same methods as the real repositories and return copies,
so a caller mutating a returned object never changes stored state.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from models.savings_plan import SavingsPlan
from models.spending_limit import SpendingLimit
from models.transaction import Transaction
from utils.errors import StoreUnavailableError, ValidationError

EPOCH = datetime(2024, 1, 1)

# Wednesday; the week started on Sunday 2024-06-09
NOW = datetime(2024, 6, 12, 14, 30)


def tx(description, amount, type_="expense", category="Food", date=NOW, id=None):
    return Transaction(description=description, amount=amount, type=type_,
                       category=category, date=date, id=id)


class _FakeStore:
    def __init__(self):
        self.rows: dict[int, object] = {}
        self.next_id = 1
        self.unavailable = False
        self.calls: list[str] = []

    def _touch(self, operation: str) -> None:
        self.calls.append(operation)
        if self.unavailable:
            raise StoreUnavailableError()

    def _new_id(self) -> int:
        record_id = self.next_id
        self.next_id += 1
        return record_id


class FakeTransactionRepository(_FakeStore):
    def __init__(self):
        super().__init__()
        self.fail_on_add = False

    def add(self, transaction: Transaction) -> Transaction:
        self._touch("add")
        if self.fail_on_add:
            raise StoreUnavailableError()
        record_id = self._new_id()
        stamp = EPOCH + timedelta(seconds=record_id)
        stored = replace(transaction, id=record_id, created_at=stamp, updated_at=stamp)
        self.rows[record_id] = stored
        return replace(stored)

    def list_all(self) -> list[Transaction]:
        self._touch("list_all")
        ordered = sorted(self.rows.values(), key=lambda t: (t.date, t.id), reverse=True)
        return [replace(t) for t in ordered]

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        self._touch("get_by_id")
        found = self.rows.get(transaction_id)
        return replace(found) if found else None

    def update(self, transaction: Transaction) -> Optional[Transaction]:
        self._touch("update")
        if transaction.id not in self.rows:
            return None
        self.rows[transaction.id] = replace(transaction)
        return replace(transaction)

    def delete(self, transaction_id: int) -> bool:
        self._touch("delete")
        return self.rows.pop(transaction_id, None) is not None


class FakeSavingsPlanRepository(_FakeStore):
    def add(self, plan: SavingsPlan) -> SavingsPlan:
        self._touch("add")
        record_id = self._new_id()
        stored = replace(plan, id=record_id, created_at=EPOCH + timedelta(seconds=record_id))
        self.rows[record_id] = stored
        return replace(stored)

    def list_all(self) -> list[SavingsPlan]:
        self._touch("list_all")
        ordered = sorted(self.rows.values(), key=lambda p: (p.created_at, p.id), reverse=True)
        return [replace(p) for p in ordered]

    def get_by_id(self, plan_id: int) -> Optional[SavingsPlan]:
        self._touch("get_by_id")
        found = self.rows.get(plan_id)
        return replace(found) if found else None

    def update(self, plan: SavingsPlan) -> Optional[SavingsPlan]:
        self._touch("update")
        if plan.id not in self.rows:
            return None
        self.rows[plan.id] = replace(plan)
        return replace(plan)

    def add_to_current_amount(self, plan_id: int, amount: float) -> Optional[SavingsPlan]:
        self._touch("add_to_current_amount")
        found = self.rows.get(plan_id)
        if not found:
            return None
        found.current_amount += amount
        return replace(found)

    def delete(self, plan_id: int) -> bool:
        self._touch("delete")
        return self.rows.pop(plan_id, None) is not None


class FakeSpendingLimitRepository(_FakeStore):
    def upsert(self, category: str, limit: float, period: str) -> SpendingLimit:
        self._touch("upsert")
        for row in self.rows.values():
            if row.category == category and row.period == period:
                row.limit = limit
                return replace(row)
        record_id = self._new_id()
        stored = SpendingLimit(category=category, limit=limit, period=period, id=record_id)
        self.rows[record_id] = stored
        return replace(stored)

    def list_all(self) -> list[SpendingLimit]:
        self._touch("list_all")
        ordered = sorted(self.rows.values(), key=lambda s: (s.category, s.period))
        return [replace(s) for s in ordered]

    def get_by_id(self, limit_id: int) -> Optional[SpendingLimit]:
        self._touch("get_by_id")
        found = self.rows.get(limit_id)
        return replace(found) if found else None

    def find(self, category: str, period: str) -> Optional[SpendingLimit]:
        self._touch("find")
        for row in self.rows.values():
            if row.category == category and row.period == period:
                return replace(row)
        return None

    def update(self, spending_limit: SpendingLimit) -> Optional[SpendingLimit]:
        self._touch("update")
        if spending_limit.id not in self.rows:
            return None
        for row in self.rows.values():
            if (row.id != spending_limit.id and row.category == spending_limit.category
                    and row.period == spending_limit.period):
                raise ValidationError(
                    f"A {spending_limit.period} limit for '{spending_limit.category}' already exists"
                )
        self.rows[spending_limit.id] = replace(spending_limit)
        return replace(spending_limit)

    def delete(self, limit_id: int) -> bool:
        self._touch("delete")
        return self.rows.pop(limit_id, None) is not None
