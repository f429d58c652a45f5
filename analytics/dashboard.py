"""
analytics/dashboard.py
----------------------
Composes every derived dashboard view from one fetched snapshot.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from analytics.aggregation import (
    BalanceSummary,
    ExpenseAnalysis,
    IncomeComparison,
    SpendingLimitStatus,
    balance_summary,
    expense_analysis,
    income_comparison,
    period_spending,
    spending_limit_status,
)
from analytics.savings import SavingsOverview, savings_overview
from analytics.windows import TimeWindow, period_window
from models.savings_plan import SavingsPlan
from models.spending_limit import TOTAL_CATEGORY, SpendingLimit, default_limit
from models.transaction import Transaction


@dataclass
class Dashboard:
    generated_at: datetime
    period: str
    balance: BalanceSummary
    spending_limit: SpendingLimit
    spending_window: TimeWindow
    spending: SpendingLimitStatus
    income: IncomeComparison
    savings: SavingsOverview
    analysis: ExpenseAnalysis

    def to_dict(self) -> dict:
        return {
            "generatedAt": self.generated_at.isoformat(),
            "period": self.period,
            "balance": self.balance.to_dict(),
            "spendingLimit": self.spending_limit.to_dict(),
            "spendingWindow": self.spending_window.to_dict(),
            "spending": self.spending.to_dict(),
            "income": self.income.to_dict(),
            "savings": self.savings.to_dict(),
            "analysis": self.analysis.to_dict(),
        }


def resolve_limit(spending_limits: Iterable[SpendingLimit], period: str) -> SpendingLimit:
    """The persisted 'Total' limit for a period, or the configured default."""
    for limit in spending_limits:
        if limit.category == TOTAL_CATEGORY and limit.period == period:
            return limit
    return default_limit(period)


def build_dashboard(
    transactions: Iterable[Transaction],
    savings_plans: Iterable[SavingsPlan],
    spending_limits: Iterable[SpendingLimit],
    period: str,
    chart_period: str,
    now: datetime,
) -> Dashboard:
    """
    Recompute all dashboard views.

    Args:
        period: 'daily' | 'weekly' | 'monthly' for the spending and income cards.
        chart_period: 'daily' | 'weekly' | 'monthly' | 'yearly' for the expense chart.
        now: Reference time for every window.

    Raises:
        ValueError: If either period is unknown.
    """
    transactions = list(transactions)
    limit = resolve_limit(spending_limits, period)
    window = period_window(period, now)

    return Dashboard(
        generated_at=now,
        period=period,
        balance=balance_summary(transactions),
        spending_limit=limit,
        spending_window=window,
        spending=spending_limit_status(limit.limit, period_spending(transactions, window)),
        income=income_comparison(transactions, period, now),
        savings=savings_overview(savings_plans),
        analysis=expense_analysis(transactions, chart_period, now),
    )
