"""
models/schemas.py
-----------------
Pydantic request bodies accepted by the REST API.

Every field is optional at this level: presence and range checks live in the
services so that both the API and the refresh controller get the same
human-readable messages.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TransactionIn(_Body):
    description: Optional[str] = None
    amount: Optional[float] = None
    type: Optional[str] = None
    category: Optional[str] = None
    # Parsed by the service so date-only and offset-carrying strings both work
    date: Optional[str] = None


class SavingsPlanIn(_Body):
    name: Optional[str] = None
    target_amount: Optional[float] = Field(None, alias="targetAmount")
    current_amount: Optional[float] = Field(None, alias="currentAmount")
    category: Optional[str] = None
    icon: Optional[str] = None
    icon_bg: Optional[str] = Field(None, alias="iconBg")


class ContributionIn(_Body):
    amount: Optional[float] = None


class SpendingLimitIn(_Body):
    category: Optional[str] = None
    limit: Optional[float] = None
    period: Optional[str] = None


class BalanceAdjustIn(_Body):
    new_balance: Optional[float] = Field(None, alias="newBalance")


class BulkDeleteIn(_Body):
    ids: list[str] = Field(default_factory=list)
