"""
services/savings_service.py
---------------------------
Business logic for savings plans, including the "add money" operation that
touches both a plan and the transaction ledger.
"""

from dataclasses import dataclass
from typing import Any, Optional

from models.savings_plan import (
    DEFAULT_SAVINGS_CATEGORY,
    SAVINGS_CATEGORY_STYLES,
    SavingsPlan,
    style_for_category,
)
from models.transaction import SAVINGS_CATEGORY, Transaction
from repositories.savings_plan_repo import SavingsPlanRepository
from repositories.transaction_repo import TransactionRepository
from services.validation import require_text, to_number, to_record_id
from utils.clock import Clock, system_clock
from utils.errors import NotFoundError, PartialOperationError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_KIND = "Savings plan"

STEP_PLAN_UPDATED = "plan_updated"
STEP_COMPANION_TRANSACTION = "companion_transaction"


@dataclass
class Contribution:
    """Result of adding money to a plan: the updated plan and its ledger entry."""
    plan: SavingsPlan
    transaction: Transaction

    def to_dict(self) -> dict:
        return {"plan": self.plan.to_dict(), "transaction": self.transaction.to_dict()}


def contribution_description(plan_name: str) -> str:
    """Description given to the expense recorded for a savings contribution."""
    return f"Savings: {plan_name}"


class SavingsService:
    """Manages savings goals and contributions to them."""

    def __init__(
        self,
        repo: Optional[SavingsPlanRepository] = None,
        transaction_repo: Optional[TransactionRepository] = None,
        clock: Clock = system_clock,
    ):
        self.repo = repo or SavingsPlanRepository()
        self.transaction_repo = transaction_repo or TransactionRepository()
        self.clock = clock

    def list_plans(self) -> list[SavingsPlan]:
        """Every plan, most recently created first."""
        return self.repo.list_all()

    def get_plan(self, plan_id: Any) -> SavingsPlan:
        plan = self.repo.get_by_id(to_record_id(plan_id, _KIND))
        if not plan:
            raise NotFoundError(f"{_KIND} not found")
        return plan

    def create_plan(self, data: dict) -> SavingsPlan:
        """
        Validate and store a new plan.

        Icon fields that are not supplied are taken from the category table.

        Raises:
            ValidationError: On a missing name or a non-positive target.
        """
        name = require_text(data.get("name"), "Name is required")
        if data.get("target_amount") is None:
            raise ValidationError("Target amount is required")
        target = self._clean_target(data["target_amount"])
        current = self._clean_current(data.get("current_amount"))
        category = self._clean_category(data.get("category"))

        icon, icon_bg = style_for_category(category)
        plan = SavingsPlan(
            name=name,
            target_amount=target,
            current_amount=current,
            category=category,
            icon=data.get("icon") or icon,
            icon_bg=data.get("icon_bg") or icon_bg,
        )
        return self.repo.add(plan)

    def update_plan(self, plan_id: Any, changes: dict) -> SavingsPlan:
        """
        Apply a partial update. Changing the category without naming new icon
        fields re-derives them from the category table.

        Raises:
            NotFoundError: If the plan does not exist.
            ValidationError: On any invalid field.
        """
        plan = self.get_plan(plan_id)

        if "name" in changes:
            plan.name = require_text(changes["name"], "Name is required")
        if "target_amount" in changes:
            plan.target_amount = self._clean_target(changes["target_amount"])
        if "current_amount" in changes:
            plan.current_amount = self._clean_current(changes["current_amount"])
        if "category" in changes:
            plan.category = self._clean_category(changes["category"])
            plan.icon, plan.icon_bg = style_for_category(plan.category)
        if changes.get("icon"):
            plan.icon = changes["icon"]
        if changes.get("icon_bg"):
            plan.icon_bg = changes["icon_bg"]

        updated = self.repo.update(plan)
        if not updated:
            raise NotFoundError(f"{_KIND} not found")
        logger.info(f"Updated savings plan #{updated.id}")
        return updated

    def delete_plan(self, plan_id: Any) -> None:
        """Delete a plan. Its past 'Savings' transactions stay in the ledger."""
        if not self.repo.delete(to_record_id(plan_id, _KIND)):
            raise NotFoundError(f"{_KIND} not found")

    def add_money(self, plan_id: Any, amount: Any) -> Contribution:
        """
        Add money to a plan and record the matching expense.

        The two writes are not atomic. If the plan update succeeds and the
        transaction insert fails, the plan keeps the new amount and a
        PartialOperationError reports which step completed.

        Raises:
            ValidationError: If the amount is not a positive number.
            NotFoundError: If the plan does not exist (nothing is written).
            PartialOperationError: If only the plan update was persisted.
        """
        value = to_number(amount, "Please enter a valid amount")
        if value <= 0:
            raise ValidationError("Amount must be greater than zero")
        record_id = to_record_id(plan_id, _KIND)

        plan = self.repo.add_to_current_amount(record_id, value)
        if not plan:
            raise NotFoundError(f"{_KIND} not found")

        companion = Transaction(
            description=contribution_description(plan.name),
            amount=value,
            type="expense",
            category=SAVINGS_CATEGORY,
            date=self.clock(),
        )
        try:
            saved = self.transaction_repo.add(companion)
        except Exception as e:
            logger.error(f"Plan #{plan.id} was credited {value:.2f} but its transaction failed: {e}")
            raise PartialOperationError(
                f"Added {value:.2f} to '{plan.name}', but the matching savings "
                f"transaction could not be recorded.",
                completed=[STEP_PLAN_UPDATED],
                failed=STEP_COMPANION_TRANSACTION,
            ) from e

        logger.info(f"Added {value:.2f} to savings plan #{plan.id} (transaction #{saved.id})")
        return Contribution(plan=plan, transaction=saved)

    # ── Helpers ───────────────────────────────────────────

    @staticmethod
    def _clean_target(value: Any) -> float:
        target = to_number(value, "Target amount must be a positive number")
        if target <= 0:
            raise ValidationError("Target amount must be a positive number")
        return target

    @staticmethod
    def _clean_current(value: Any) -> float:
        if value is None or value == "":
            return 0.0
        current = to_number(value, "Current amount must be a number")
        if current < 0:
            raise ValidationError("Current amount must not be negative")
        return current

    @staticmethod
    def _clean_category(value: Any) -> str:
        category = str(value).strip() if value else DEFAULT_SAVINGS_CATEGORY
        if category not in SAVINGS_CATEGORY_STYLES:
            allowed = ", ".join(SAVINGS_CATEGORY_STYLES)
            raise ValidationError(f"Category must be one of: {allowed}")
        return category
