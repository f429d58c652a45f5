"""
analytics/search.py
-------------------
Combined search over transactions and savings plans.

Matching is a case-insensitive substring test; results keep the order the
store returned them in. At most 5 transactions are returned, followed by at
most 3 savings plans.
"""

from dataclasses import dataclass, field
from typing import Iterable, Union

from models.savings_plan import SavingsPlan
from models.transaction import Transaction
from utils.formatting import decimal_string

MIN_QUERY_LENGTH = 2
MAX_TRANSACTION_HITS = 5
MAX_SAVINGS_HITS = 3

KIND_TRANSACTION = "transaction"
KIND_SAVINGS = "savings"
TRANSACTION_ICON = "ti ti-receipt"


@dataclass
class SearchHit:
    kind: str
    record: Union[Transaction, SavingsPlan]
    display_text: str
    icon: str

    def to_dict(self) -> dict:
        return {
            **self.record.to_dict(),
            "kind": self.kind,
            "displayText": self.display_text,
            "icon": self.icon,
        }


@dataclass
class SearchResult:
    """
    Outcome of a search request.

    `searching` is False when the query was too short for a search to run,
    which is different from a search that ran and found nothing.
    """
    query: str
    searching: bool
    hits: list[SearchHit] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.hits)

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "searching": self.searching,
            "count": self.count,
            "results": [h.to_dict() for h in self.hits],
        }


def should_search(query: str) -> bool:
    return query is not None and len(query) >= MIN_QUERY_LENGTH


def not_searching(query: str) -> SearchResult:
    return SearchResult(query=query or "", searching=False)


def transaction_matches(transaction: Transaction, needle: str) -> bool:
    return (
        needle in transaction.description.lower()
        or needle in transaction.category.lower()
        or needle in decimal_string(transaction.amount)
    )


def plan_matches(plan: SavingsPlan, needle: str) -> bool:
    return (
        needle in plan.name.lower()
        or needle in plan.category.lower()
        or needle in decimal_string(plan.target_amount)
    )


def _first(items: Iterable, predicate, limit: int) -> list:
    found = []
    for item in items:
        if len(found) == limit:
            break
        if predicate(item):
            found.append(item)
    return found


def search_records(
    query: str,
    transactions: Iterable[Transaction],
    plans: Iterable[SavingsPlan],
) -> SearchResult:
    """
    Rank transactions and savings plans against a free-text query.

    Args:
        query: Raw user input; fewer than 2 characters means "not searching".
        transactions: Transactions in store order (newest first).
        plans: Savings plans in store order.
    """
    if not should_search(query):
        return not_searching(query)

    needle = query.lower()
    hits = [
        SearchHit(
            kind=KIND_TRANSACTION,
            record=t,
            display_text=f"{t.description} (₹{decimal_string(t.amount)})",
            icon=TRANSACTION_ICON,
        )
        for t in _first(transactions, lambda t: transaction_matches(t, needle), MAX_TRANSACTION_HITS)
    ]
    hits += [
        SearchHit(
            kind=KIND_SAVINGS,
            record=p,
            display_text=f"{p.name} (₹{decimal_string(p.current_amount)}/₹{decimal_string(p.target_amount)})",
            icon=p.icon,
        )
        for p in _first(plans, lambda p: plan_matches(p, needle), MAX_SAVINGS_HITS)
    ]
    return SearchResult(query=query, searching=True, hits=hits)
