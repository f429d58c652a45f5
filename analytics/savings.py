"""
analytics/savings.py
--------------------
Savings progress per plan and across all plans.
"""

from dataclasses import dataclass, field
from typing import Iterable

from models.savings_plan import SavingsPlan


@dataclass
class PlanProgress:
    """
    Progress of a single plan.

    `remaining` goes negative for an overfunded plan; only
    `display_remaining` and `bar_width` are clamped.
    """
    plan: SavingsPlan
    progress: float
    bar_width: float
    remaining: float
    display_remaining: float

    def to_dict(self) -> dict:
        return {
            "plan": self.plan.to_dict(),
            "progress": self.progress,
            "barWidth": self.bar_width,
            "remaining": self.remaining,
            "displayRemaining": self.display_remaining,
        }


def plan_progress(plan: SavingsPlan) -> PlanProgress:
    if plan.target_amount > 0:
        progress = plan.current_amount / plan.target_amount * 100
    else:
        progress = 0.0
    remaining = plan.target_amount - plan.current_amount
    return PlanProgress(
        plan=plan,
        progress=progress,
        bar_width=min(progress, 100.0),
        remaining=remaining,
        display_remaining=max(0.0, remaining),
    )


@dataclass
class SavingsOverview:
    total_current: float
    total_target: float
    overall_progress: float
    plans: list[PlanProgress] = field(default_factory=list)

    @property
    def bar_width(self) -> float:
        return min(self.overall_progress, 100.0)

    def to_dict(self) -> dict:
        return {
            "totalSavings": self.total_current,
            "overallTarget": self.total_target,
            "overallProgress": self.overall_progress,
            "barWidth": self.bar_width,
            "plans": [p.to_dict() for p in self.plans],
        }


def savings_overview(plans: Iterable[SavingsPlan]) -> SavingsOverview:
    """Sum saved and target amounts over every plan; progress is 0 when there is no target."""
    plans = list(plans)
    total_current = sum(p.current_amount for p in plans)
    total_target = sum(p.target_amount for p in plans)
    overall = total_current / total_target * 100 if total_target != 0 else 0.0
    return SavingsOverview(
        total_current=total_current,
        total_target=total_target,
        overall_progress=overall,
        plans=[plan_progress(p) for p in plans],
    )
