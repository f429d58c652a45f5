"""
models/savings_plan.py
----------------------
Domain model for savings goals.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DEFAULT_SAVINGS_CATEGORY = "Other"

# category -> (icon, icon background); the UI picks both from this table
SAVINGS_CATEGORY_STYLES: dict[str, tuple[str, str]] = {
    "Car": ("ti ti-car", "bg-blue-500"),
    "House": ("ti ti-home", "bg-green-500"),
    "Vacation": ("ti ti-plane", "bg-yellow-500"),
    "Education": ("ti ti-book", "bg-red-500"),
    "Electronics": ("ti ti-device-laptop", "bg-purple-500"),
    "Gift": ("ti ti-gift", "bg-pink-500"),
    "Health": ("ti ti-heart", "bg-orange-500"),
    "Other": ("ti ti-piggy-bank", "bg-indigo-500"),
}


def style_for_category(category: Optional[str]) -> tuple[str, str]:
    """Icon and background for a savings category, falling back to 'Other'."""
    return SAVINGS_CATEGORY_STYLES.get(
        category or DEFAULT_SAVINGS_CATEGORY,
        SAVINGS_CATEGORY_STYLES[DEFAULT_SAVINGS_CATEGORY],
    )


@dataclass
class SavingsPlan:
    """
    Represents a savings goal.

    Attributes:
        id: Database primary key (None for new records).
        name: Goal name.
        target_amount: Amount to reach (> 0).
        current_amount: Amount saved so far; may exceed the target.
        category: One of SAVINGS_CATEGORY_STYLES.
        icon: Presentation hint, stored independently of `category`.
        icon_bg: Presentation hint, stored independently of `category`.
        created_at: Timestamp when the record was created.
    """
    name: str
    target_amount: float
    current_amount: float = 0.0
    category: str = DEFAULT_SAVINGS_CATEGORY
    icon: str = SAVINGS_CATEGORY_STYLES[DEFAULT_SAVINGS_CATEGORY][0]
    icon_bg: str = SAVINGS_CATEGORY_STYLES[DEFAULT_SAVINGS_CATEGORY][1]
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """JSON representation used by the REST API."""
        return {
            "id": str(self.id) if self.id is not None else None,
            "name": self.name,
            "targetAmount": self.target_amount,
            "currentAmount": self.current_amount,
            "category": self.category,
            "icon": self.icon,
            "iconBg": self.icon_bg,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __str__(self) -> str:
        return f"{self.name}: {self.current_amount:.2f} / {self.target_amount:.2f} ({self.category})"
