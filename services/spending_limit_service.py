"""
services/spending_limit_service.py
----------------------------------
Business logic for spending limits.
"""

from typing import Any, Optional

from models.spending_limit import LIMIT_PERIODS, TOTAL_CATEGORY, SpendingLimit, default_limit
from repositories.spending_limit_repo import SpendingLimitRepository
from services.validation import require_text, to_number, to_record_id
from utils.errors import NotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_KIND = "Spending limit"
_REQUIRED_MESSAGE = "Category, limit, and period are required"
_PERIOD_MESSAGE = "Period must be daily, weekly, or monthly"


class SpendingLimitService:
    """Manages spending limits per (category, period)."""

    def __init__(self, repo: Optional[SpendingLimitRepository] = None):
        self.repo = repo or SpendingLimitRepository()

    def list_limits(self) -> list[SpendingLimit]:
        return self.repo.list_all()

    def get_for_period(self, period: str) -> SpendingLimit:
        """
        The 'Total' limit for a period. When none is stored, an unsaved
        default (daily 1000, weekly 5000, monthly 20000) is returned.
        """
        period = self._clean_period(period)
        stored = self.repo.find(TOTAL_CATEGORY, period)
        return stored or default_limit(period)

    def set_limit(self, data: dict) -> SpendingLimit:
        """
        Create or replace the limit for the (category, period) pair in `data`.
        Calling this twice for the same pair leaves a single row.
        """
        category, limit, period = data.get("category"), data.get("limit"), data.get("period")
        if not category or limit in (None, "") or not period:
            raise ValidationError(_REQUIRED_MESSAGE)
        return self.repo.upsert(
            require_text(category, _REQUIRED_MESSAGE),
            self._clean_limit(limit),
            self._clean_period(period),
        )

    def update_limit(self, limit_id: Any, changes: dict) -> SpendingLimit:
        spending_limit = self.repo.get_by_id(to_record_id(limit_id, _KIND))
        if not spending_limit:
            raise NotFoundError(f"{_KIND} not found")

        if "category" in changes:
            spending_limit.category = require_text(changes["category"], "Category is required")
        if "limit" in changes:
            spending_limit.limit = self._clean_limit(changes["limit"])
        if "period" in changes:
            spending_limit.period = self._clean_period(changes["period"])

        updated = self.repo.update(spending_limit)
        if not updated:
            raise NotFoundError(f"{_KIND} not found")
        logger.info(f"Updated spending limit #{updated.id}")
        return updated

    def delete_limit(self, limit_id: Any) -> None:
        if not self.repo.delete(to_record_id(limit_id, _KIND)):
            raise NotFoundError(f"{_KIND} not found")
        logger.info(f"Deleted spending limit #{limit_id}")

    @staticmethod
    def _clean_limit(value: Any) -> float:
        limit = to_number(value, "Limit must be a number")
        if limit <= 0:
            raise ValidationError("Please enter a valid amount")
        return limit

    @staticmethod
    def _clean_period(value: Any) -> str:
        period = str(value or "").strip().lower()
        if period not in LIMIT_PERIODS:
            raise ValidationError(_PERIOD_MESSAGE)
        return period
