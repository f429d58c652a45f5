"""
models/transaction.py
---------------------
Domain model for financial transactions (income and expenses).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

TRANSACTION_TYPES = ("income", "expense")

# Categories written by the application itself rather than typed by a user
ADJUSTMENT_CATEGORY = "Adjustment"
ADJUSTMENT_DESCRIPTION = "Balance Adjustment"
SAVINGS_CATEGORY = "Savings"


@dataclass
class Transaction:
    """
    Represents a single movement of money.

    Attributes:
        id: Database primary key (None for new records).
        description: Free-text label.
        amount: Non-negative magnitude; the direction comes from `type`.
        type: Either 'income' or 'expense'.
        category: Spending/income category label.
        date: When the transaction happened (local time).
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update.
    """
    description: str
    amount: float
    type: str  # 'income' | 'expense'
    category: str
    date: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_expense(self) -> bool:
        """Returns True if this is an expense transaction."""
        return self.type == "expense"

    @property
    def signed_amount(self) -> float:
        return -self.amount if self.is_expense() else self.amount

    def to_dict(self) -> dict:
        """JSON representation used by the REST API."""
        return {
            "id": str(self.id) if self.id is not None else None,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
            "category": self.category,
            "date": self.date.isoformat(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self) -> str:
        sign = "-" if self.is_expense() else "+"
        return f"{sign}{self.amount:.2f} | {self.category} | {self.description} | {self.date:%Y-%m-%d %H:%M}"
