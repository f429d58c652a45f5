"""
models/spending_limit.py
------------------------
Domain model for spending limits.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from config import DEFAULT_SPENDING_LIMITS

LIMIT_PERIODS = ("daily", "weekly", "monthly")

# The only category the dashboard sets a limit for
TOTAL_CATEGORY = "Total"


@dataclass
class SpendingLimit:
    """
    A cap on spending for one (category, period) pair.

    Attributes:
        id: Database primary key; None for an unsaved default.
        category: Category label, in practice always 'Total'.
        limit: Maximum spend for the period (> 0).
        period: 'daily' | 'weekly' | 'monthly'.
    """
    category: str
    limit: float
    period: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = {
            "category": self.category,
            "limit": self.limit,
            "period": self.period,
        }
        if self.id is not None:
            data["id"] = str(self.id)
        return data


def default_limit(period: str, category: str = TOTAL_CATEGORY) -> SpendingLimit:
    """Unsaved limit served when nothing is persisted for the period."""
    return SpendingLimit(category=category, limit=DEFAULT_SPENDING_LIMITS[period], period=period)
