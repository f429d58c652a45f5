"""
analytics/aggregation.py
------------------------
Balance, spending-limit and income/savings-rate summaries.

Pure functions over a list of Transaction objects; nothing here touches the
store or the clock.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from analytics.windows import Bucket, TimeWindow, expense_buckets, period_window, previous_window
from models.transaction import Transaction

# Progress bar tiers (percentage used)
TIER_SAFE = "safe"
TIER_WARNING = "warning"
TIER_CRITICAL = "critical"
WARNING_THRESHOLD = 50
CRITICAL_THRESHOLD = 75
APPROACHING_LIMIT_THRESHOLD = 90

# Savings-rate health tiers
HEALTH_HEALTHY = "healthy"
HEALTH_MODERATE = "moderate"
HEALTH_LOW = "low"
HEALTHY_SAVINGS_RATE = 15


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (0.5 -> 1, 2.5 -> 3)."""
    return math.floor(value + 0.5)


def sum_amounts(
    transactions: Iterable[Transaction],
    tx_type: str,
    window: Optional[TimeWindow] = None,
) -> float:
    """Sum the amounts of one transaction type, optionally inside a window."""
    return sum(
        t.amount for t in transactions
        if t.type == tx_type and (window is None or window.contains(t.date))
    )


def total_income(transactions: Iterable[Transaction]) -> float:
    return sum_amounts(transactions, "income")


def total_expenses(transactions: Iterable[Transaction]) -> float:
    return sum_amounts(transactions, "expense")


def total_balance(transactions: Iterable[Transaction]) -> float:
    """All-time income minus all-time expenses."""
    transactions = list(transactions)
    return total_income(transactions) - total_expenses(transactions)


def period_spending(transactions: Iterable[Transaction], window: TimeWindow) -> float:
    return sum_amounts(transactions, "expense", window)


def percentage_change(current: float, previous: float) -> float:
    """
    Period-over-period change in percent.

    When there is nothing to compare against the change is 100 if the
    current period has anything at all, else 0.
    """
    if previous > 0:
        return (current - previous) / previous * 100
    return 100.0 if current > 0 else 0.0


def progress_tier(percentage: float) -> str:
    if percentage < WARNING_THRESHOLD:
        return TIER_SAFE
    if percentage < CRITICAL_THRESHOLD:
        return TIER_WARNING
    return TIER_CRITICAL


def savings_health(savings_percentage: float) -> str:
    if savings_percentage > HEALTHY_SAVINGS_RATE:
        return HEALTH_HEALTHY
    if savings_percentage > 0:
        return HEALTH_MODERATE
    return HEALTH_LOW


# ── Balance ───────────────────────────────────────────────

@dataclass
class BalanceSummary:
    total_income: float
    total_expenses: float
    balance: float

    def to_dict(self) -> dict:
        return {
            "totalIncome": self.total_income,
            "totalExpenses": self.total_expenses,
            "balance": self.balance,
        }


def balance_summary(transactions: Iterable[Transaction]) -> BalanceSummary:
    transactions = list(transactions)
    income = total_income(transactions)
    expenses = total_expenses(transactions)
    return BalanceSummary(income, expenses, income - expenses)


# ── Spending limit ────────────────────────────────────────

@dataclass
class SpendingLimitStatus:
    """
    How much of a spending limit has been consumed.

    `percentage_used` is rounded and clamped to [0, 100] for display;
    `raw_percentage` and `spent` are never clamped.
    """
    limit: float
    spent: float
    raw_percentage: float
    percentage_used: int
    amount_remaining: float
    tier: str
    approaching_limit: bool

    def to_dict(self) -> dict:
        return {
            "limit": self.limit,
            "spent": self.spent,
            "rawPercentage": self.raw_percentage,
            "percentageUsed": self.percentage_used,
            "amountRemaining": self.amount_remaining,
            "tier": self.tier,
            "approachingLimit": self.approaching_limit,
        }


def spending_limit_status(limit: float, spent: float) -> SpendingLimitStatus:
    if limit > 0:
        raw = spent / limit * 100
    else:
        raw = 100.0 if spent > 0 else 0.0
    used = max(0, min(100, round_half_up(raw)))
    return SpendingLimitStatus(
        limit=limit,
        spent=spent,
        raw_percentage=raw,
        percentage_used=used,
        amount_remaining=max(0.0, limit - spent),
        tier=progress_tier(used),
        approaching_limit=used >= APPROACHING_LIMIT_THRESHOLD,
    )


# ── Income comparison / savings rate ──────────────────────

@dataclass
class IncomeComparison:
    period: str
    current_income: float
    previous_income: float
    percentage_change: float
    current_expense: float
    savings_amount: float
    savings_percentage: float
    health: str

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "currentAmount": self.current_income,
            "previousAmount": self.previous_income,
            "percentageChange": self.percentage_change,
            "currentExpense": self.current_expense,
            "savingsAmount": self.savings_amount,
            "savingsPercentage": self.savings_percentage,
            "health": self.health,
        }


def income_comparison(transactions: Iterable[Transaction], period: str, now: datetime) -> IncomeComparison:
    """
    Compare this period's income with the previous period's and derive the
    savings rate for the current period.
    """
    transactions = list(transactions)
    current = period_window(period, now)
    previous = previous_window(period, now)

    income_now = sum_amounts(transactions, "income", current)
    income_before = sum_amounts(transactions, "income", previous)
    expense_now = sum_amounts(transactions, "expense", current)

    savings = income_now - expense_now
    savings_pct = savings / income_now * 100 if income_now > 0 else 0.0

    return IncomeComparison(
        period=period,
        current_income=income_now,
        previous_income=income_before,
        percentage_change=percentage_change(income_now, income_before),
        current_expense=expense_now,
        savings_amount=savings,
        savings_percentage=savings_pct,
        health=savings_health(savings_pct),
    )


# ── Expense analysis chart ────────────────────────────────

@dataclass
class ExpenseAnalysis:
    period: str
    buckets: list[Bucket] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(b.value for b in self.buckets)

    @property
    def highest(self) -> float:
        return max((b.value for b in self.buckets), default=0.0)

    @property
    def lowest(self) -> float:
        return min((b.value for b in self.buckets), default=0.0)

    @property
    def highest_label(self) -> Optional[str]:
        """Label of the first bucket holding the highest non-zero value."""
        if self.highest <= 0:
            return None
        return next(b.label for b in self.buckets if b.value == self.highest)

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "data": [b.to_dict() for b in self.buckets],
            "total": self.total,
            "highest": self.highest,
            "highestLabel": self.highest_label,
            "lowest": self.lowest,
        }


def expense_analysis(transactions: Iterable[Transaction], period: str, now: datetime) -> ExpenseAnalysis:
    return ExpenseAnalysis(period=period, buckets=expense_buckets(transactions, period, now))
