import pytest

from services.savings_service import SavingsService
from services.spending_limit_service import SpendingLimitService
from services.transaction_service import TransactionService
from sync.refresh_controller import RefreshController
from tests.fakes import (
    NOW,
    FakeSavingsPlanRepository,
    FakeSpendingLimitRepository,
    FakeTransactionRepository,
)
from utils.clock import fixed_clock


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
def transaction_repo():
    return FakeTransactionRepository()


@pytest.fixture
def savings_repo():
    return FakeSavingsPlanRepository()


@pytest.fixture
def limit_repo():
    return FakeSpendingLimitRepository()


@pytest.fixture
def transaction_service(transaction_repo, clock):
    return TransactionService(repo=transaction_repo, clock=clock)


@pytest.fixture
def savings_service(savings_repo, transaction_repo, clock):
    return SavingsService(repo=savings_repo, transaction_repo=transaction_repo, clock=clock)


@pytest.fixture
def spending_limit_service(limit_repo):
    return SpendingLimitService(repo=limit_repo)


@pytest.fixture
def controller(transaction_service, savings_service, spending_limit_service, clock):
    return RefreshController(
        transaction_service,
        savings_service,
        spending_limit_service,
        clock=clock,
        debounce_seconds=0.02,
    )
