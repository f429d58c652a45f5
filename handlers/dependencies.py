"""
handlers/dependencies.py
------------------------
Shared service instances and the FastAPI dependency providers that hand
them to the routers. Tests swap any of them through
``app.dependency_overrides``.
"""

from analytics.windows import CHART_PERIODS, COMPARISON_PERIODS
from services.chart_service import ChartService
from services.savings_service import SavingsService
from services.spending_limit_service import SpendingLimitService
from services.transaction_service import TransactionService
from sync.refresh_controller import RefreshController
from utils.clock import Clock, system_clock
from utils.errors import ValidationError

transaction_service = TransactionService()
savings_service = SavingsService(transaction_repo=transaction_service.repo)
spending_limit_service = SpendingLimitService()
chart_service = ChartService()
refresh_controller = RefreshController(transaction_service, savings_service, spending_limit_service)


def get_transaction_service() -> TransactionService:
    return transaction_service


def get_savings_service() -> SavingsService:
    return savings_service


def get_spending_limit_service() -> SpendingLimitService:
    return spending_limit_service


def get_chart_service() -> ChartService:
    return chart_service


def get_refresh_controller() -> RefreshController:
    return refresh_controller


def get_clock() -> Clock:
    return system_clock


def require_period(value: str, allowed: tuple = COMPARISON_PERIODS) -> str:
    """Reject a period name outside `allowed` with a 400."""
    if value not in allowed:
        names = ", ".join(allowed)
        raise ValidationError(f"Period must be one of: {names}")
    return value


def require_chart_period(value: str) -> str:
    return require_period(value, CHART_PERIODS)
