"""
services/transaction_service.py
-------------------------------
Business logic for income/expense transactions and balance adjustments.
"""

from typing import Any, Optional

from analytics.aggregation import total_balance
from models.transaction import (
    ADJUSTMENT_CATEGORY,
    ADJUSTMENT_DESCRIPTION,
    TRANSACTION_TYPES,
    Transaction,
)
from repositories.transaction_repo import TransactionRepository
from services.validation import require_text, to_datetime, to_number, to_record_id
from utils.clock import Clock, system_clock
from utils.errors import NotFoundError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_KIND = "Transaction"


class TransactionService:
    """
    Handles all business logic related to transactions.

    Workflow:
        1. Receive a field dict from the HTTP layer or the refresh controller.
        2. Validate and normalize every field.
        3. Persist via the repository.
        4. Return the stored domain object.
    """

    def __init__(self, repo: Optional[TransactionRepository] = None, clock: Clock = system_clock):
        self.repo = repo or TransactionRepository()
        self.clock = clock

    # ── Queries ───────────────────────────────────────────

    def list_transactions(self) -> list[Transaction]:
        """Every transaction, newest first."""
        return self.repo.list_all()

    def get_transaction(self, transaction_id: Any) -> Transaction:
        transaction = self.repo.get_by_id(to_record_id(transaction_id, _KIND))
        if not transaction:
            raise NotFoundError(f"{_KIND} not found")
        return transaction

    def current_balance(self) -> float:
        return total_balance(self.repo.list_all())

    # ── Commands ──────────────────────────────────────────

    def create_transaction(self, data: dict) -> Transaction:
        """
        Validate and store a new transaction.

        Args:
            data: Keys description, amount, type, category and optional date.

        Raises:
            ValidationError: On any missing or invalid field.
        """
        transaction = Transaction(
            description=require_text(data.get("description"), "Description is required"),
            amount=self._clean_amount(data.get("amount")),
            type=self._clean_type(data.get("type")),
            category=require_text(data.get("category"), "Category is required"),
            date=to_datetime(data.get("date")) or self.clock(),
        )
        return self.repo.add(transaction)

    def update_transaction(self, transaction_id: Any, changes: dict) -> Transaction:
        """
        Apply a partial or full update; only keys present in `changes` are touched.

        Raises:
            NotFoundError: If the transaction does not exist.
            ValidationError: On any invalid field.
        """
        transaction = self.get_transaction(transaction_id)

        if "description" in changes:
            transaction.description = require_text(changes["description"], "Description is required")
        if "amount" in changes:
            transaction.amount = self._clean_amount(changes["amount"])
        if "type" in changes:
            transaction.type = self._clean_type(changes["type"])
        if "category" in changes:
            transaction.category = require_text(changes["category"], "Category is required")
        if "date" in changes:
            transaction.date = to_datetime(changes["date"]) or transaction.date

        updated = self.repo.update(transaction)
        if not updated:
            raise NotFoundError(f"{_KIND} not found")
        logger.info(f"Updated transaction #{updated.id}")
        return updated

    def delete_transaction(self, transaction_id: Any) -> None:
        record_id = to_record_id(transaction_id, _KIND)
        if not self.repo.delete(record_id):
            raise NotFoundError(f"{_KIND} not found")

    def adjust_balance(self, new_balance: Any) -> Optional[Transaction]:
        """
        Record the income or expense needed to move the balance to `new_balance`.

        Returns:
            The adjustment Transaction, or None when the balance already matches
            (difference rounds to 0.00).
        """
        target = to_number(new_balance, "Invalid balance amount")
        current = self.current_balance()
        difference = round(target - current, 2)

        if difference == 0:
            logger.info(f"Balance already at {target:.2f}; no adjustment recorded")
            return None

        adjustment = Transaction(
            description=ADJUSTMENT_DESCRIPTION,
            amount=abs(difference),
            type="income" if difference > 0 else "expense",
            category=ADJUSTMENT_CATEGORY,
            date=self.clock(),
        )
        saved = self.repo.add(adjustment)
        logger.info(f"Balance adjusted {current:.2f} -> {target:.2f} via #{saved.id}")
        return saved

    # ── Helpers ───────────────────────────────────────────

    @staticmethod
    def _clean_amount(value: Any) -> float:
        if value is None:
            raise ValidationError("Amount is required")
        amount = to_number(value, "Amount must be a number")
        if amount < 0:
            raise ValidationError("Amount must not be negative")
        return amount

    @staticmethod
    def _clean_type(value: Any) -> str:
        tx_type = str(value or "").strip().lower()
        if tx_type not in TRANSACTION_TYPES:
            raise ValidationError("Type must be either income or expense")
        return tx_type
