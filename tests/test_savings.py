import pytest

from analytics.savings import plan_progress, savings_overview
from models.savings_plan import SavingsPlan


def test_overfunded_plan_keeps_negative_remaining():
    progress = plan_progress(SavingsPlan(name="Car", target_amount=1000, current_amount=1100))
    assert progress.progress == pytest.approx(110)
    assert progress.bar_width == 100
    assert progress.remaining == -100
    assert progress.display_remaining == 0


def test_overall_progress():
    overview = savings_overview([
        SavingsPlan(name="Car", target_amount=1000, current_amount=250),
        SavingsPlan(name="Trip", target_amount=3000, current_amount=750),
    ])
    assert overview.total_current == 1000
    assert overview.total_target == 4000
    assert overview.overall_progress == 25
    assert [p.progress for p in overview.plans] == [25, 25]


def test_no_plans_means_zero_progress():
    overview = savings_overview([])
    assert overview.overall_progress == 0
    assert overview.to_dict()["plans"] == []
