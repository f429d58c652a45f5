import pytest

from analytics.savings import plan_progress
from tests.fakes import NOW
from utils.errors import NotFoundError, PartialOperationError, ValidationError


def test_create_derives_icon_from_category(savings_service):
    plan = savings_service.create_plan({"name": "New car", "target_amount": 1000, "category": "Car"})
    assert plan.current_amount == 0
    assert (plan.icon, plan.icon_bg) == ("ti ti-car", "bg-blue-500")


def test_create_defaults_to_other(savings_service):
    plan = savings_service.create_plan({"name": "Rainy day", "target_amount": 500})
    assert plan.category == "Other"
    assert plan.icon == "ti ti-piggy-bank"


def test_explicit_icon_wins(savings_service):
    plan = savings_service.create_plan({
        "name": "Laptop", "target_amount": 900, "category": "Electronics", "icon": "ti ti-star",
    })
    assert plan.icon == "ti ti-star"
    assert plan.icon_bg == "bg-purple-500"


@pytest.mark.parametrize("data, message", [
    ({"target_amount": 100}, "Name is required"),
    ({"name": "x"}, "Target amount is required"),
    ({"name": "x", "target_amount": 0}, "Target amount must be a positive number"),
    ({"name": "x", "target_amount": -10}, "Target amount must be a positive number"),
    ({"name": "x", "target_amount": 10, "current_amount": "lots"}, "Current amount must be a number"),
    ({"name": "x", "target_amount": 1000, "current_amount": -500}, "Current amount must not be negative"),
])
def test_create_validation(savings_service, data, message):
    with pytest.raises(ValidationError) as exc:
        savings_service.create_plan(data)
    assert exc.value.message == message


def test_category_change_rederives_icon(savings_service):
    plan = savings_service.create_plan({"name": "Goal", "target_amount": 100})
    updated = savings_service.update_plan(plan.id, {"category": "Vacation"})
    assert (updated.icon, updated.icon_bg) == ("ti ti-plane", "bg-yellow-500")


def test_update_rejects_negative_current_amount(savings_service, savings_repo):
    plan = savings_service.create_plan({"name": "Car", "target_amount": 1000, "current_amount": 200})

    with pytest.raises(ValidationError) as exc:
        savings_service.update_plan(plan.id, {"current_amount": -250})

    assert exc.value.message == "Current amount must not be negative"
    assert savings_repo.rows[plan.id].current_amount == 200


def test_update_unknown_plan(savings_service):
    with pytest.raises(NotFoundError):
        savings_service.update_plan("99", {"name": "x"})


def test_add_money_twice_overfunds(savings_service, transaction_repo):
    plan = savings_service.create_plan({"name": "Car", "target_amount": 1000, "category": "Car"})

    savings_service.add_money(plan.id, 300)
    contribution = savings_service.add_money(plan.id, 800)

    assert contribution.plan.current_amount == 1100
    progress = plan_progress(contribution.plan)
    assert progress.display_remaining == 0
    assert progress.remaining == -100

    companions = transaction_repo.list_all()
    assert len(companions) == 2
    assert {t.amount for t in companions} == {300, 800}
    for companion in companions:
        assert companion.type == "expense"
        assert companion.category == "Savings"
        assert companion.description == "Savings: Car"
        assert companion.date == NOW


def test_add_money_validation_writes_nothing(savings_service, savings_repo, transaction_repo):
    plan = savings_service.create_plan({"name": "Car", "target_amount": 1000})
    with pytest.raises(ValidationError):
        savings_service.add_money(plan.id, 0)
    with pytest.raises(NotFoundError):
        savings_service.add_money("12345", 50)
    assert savings_repo.get_by_id(plan.id).current_amount == 0
    assert transaction_repo.rows == {}


def test_add_money_reports_partial_failure(savings_service, savings_repo, transaction_repo):
    plan = savings_service.create_plan({"name": "Car", "target_amount": 1000})
    transaction_repo.fail_on_add = True

    with pytest.raises(PartialOperationError) as exc:
        savings_service.add_money(plan.id, 250)

    assert exc.value.completed == ["plan_updated"]
    assert exc.value.failed == "companion_transaction"
    assert savings_repo.get_by_id(plan.id).current_amount == 250
    assert transaction_repo.rows == {}


def test_delete_leaves_savings_transactions(savings_service, transaction_repo):
    plan = savings_service.create_plan({"name": "Car", "target_amount": 1000})
    savings_service.add_money(plan.id, 100)
    savings_service.delete_plan(str(plan.id))
    assert len(transaction_repo.rows) == 1
    with pytest.raises(NotFoundError):
        savings_service.delete_plan(str(plan.id))
