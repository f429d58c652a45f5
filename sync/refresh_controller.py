"""
sync/refresh_controller.py
--------------------------
Keeps an in-memory snapshot of every record list and rebuilds it after each
mutation. The dashboard is always derived from the installed snapshot; there
are no incremental updates.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from analytics.dashboard import Dashboard, build_dashboard
from analytics.search import SearchResult, not_searching, search_records, should_search
from analytics.windows import WEEKLY
from config import SEARCH_DEBOUNCE_MS
from models.savings_plan import SavingsPlan
from models.spending_limit import SpendingLimit
from models.transaction import Transaction
from services.savings_service import SavingsService
from services.spending_limit_service import SpendingLimitService
from services.transaction_service import TransactionService
from sync.debounce import Debouncer
from utils.clock import Clock, system_clock
from utils.errors import FinanceError, PartialOperationError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Snapshot:
    """Record lists fetched together by one refresh."""
    transactions: list[Transaction] = field(default_factory=list)
    savings_plans: list[SavingsPlan] = field(default_factory=list)
    spending_limits: list[SpendingLimit] = field(default_factory=list)
    fetched_at: Optional[datetime] = None
    sequence: int = 0


@dataclass
class BulkDeleteResult:
    deleted: list[str] = field(default_factory=list)
    failed: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"deleted": self.deleted, "failed": self.failed}


class RefreshController:
    """
    Orchestrates fetch, mutate and re-fetch cycles over the three services.

    Fetches run in worker threads (the services are blocking psycopg2 code)
    and are awaited together. Each refresh carries a sequence number; a
    response is installed only if no later refresh has been installed first,
    so a slow stale response can never overwrite newer state.
    """

    def __init__(
        self,
        transaction_service: TransactionService,
        savings_service: SavingsService,
        spending_limit_service: SpendingLimitService,
        clock: Clock = system_clock,
        debounce_seconds: float = SEARCH_DEBOUNCE_MS / 1000,
    ):
        self.transaction_service = transaction_service
        self.savings_service = savings_service
        self.spending_limit_service = spending_limit_service
        self.clock = clock
        self.snapshot = Snapshot()
        self._issued = 0
        self.debounce_seconds = debounce_seconds
        self._debouncers: dict[str, Debouncer] = {}

    # ── Fetching ──────────────────────────────────────────

    async def refresh(self) -> Snapshot:
        """
        Re-fetch every list and install the result if it is the newest.

        Raises:
            FinanceError: When any fetch fails; the previous snapshot stays installed.
        """
        self._issued += 1
        sequence = self._issued

        try:
            transactions, plans, limits = await asyncio.gather(
                asyncio.to_thread(self.transaction_service.list_transactions),
                asyncio.to_thread(self.savings_service.list_plans),
                asyncio.to_thread(self.spending_limit_service.list_limits),
            )
        except FinanceError as e:
            logger.error(f"Refresh #{sequence} failed, keeping snapshot #{self.snapshot.sequence}: {e.message}")
            raise

        if sequence <= self.snapshot.sequence:
            logger.info(f"Discarding refresh #{sequence}; snapshot #{self.snapshot.sequence} is newer")
            return self.snapshot

        self.snapshot = Snapshot(
            transactions=transactions,
            savings_plans=plans,
            spending_limits=limits,
            fetched_at=self.clock(),
            sequence=sequence,
        )
        return self.snapshot

    # ── Mutations ─────────────────────────────────────────

    async def mutate(self, operation: Callable, *args, **kwargs) -> tuple[Any, Snapshot]:
        """
        Run a blocking service mutation, then refresh.

        A failed mutation is re-raised without a refresh, except for a
        partial failure where part of the write did land.
        """
        try:
            result = await asyncio.to_thread(operation, *args, **kwargs)
        except PartialOperationError:
            await self.refresh()
            raise
        return result, await self.refresh()

    async def delete_transactions(self, ids: list[str]) -> BulkDeleteResult:
        """Delete several transactions concurrently and refresh once at the end."""
        outcomes = await asyncio.gather(
            *(asyncio.to_thread(self.transaction_service.delete_transaction, i) for i in ids),
            return_exceptions=True,
        )

        result = BulkDeleteResult()
        for transaction_id, outcome in zip(ids, outcomes):
            if isinstance(outcome, FinanceError):
                result.failed.append({"id": transaction_id, "message": outcome.message})
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                result.deleted.append(transaction_id)

        if result.failed:
            logger.warning(f"Bulk delete: {len(result.deleted)} deleted, {len(result.failed)} failed")
        await self.refresh()
        return result

    # ── Views ─────────────────────────────────────────────

    async def search(self, query: str) -> SearchResult:
        """Fetch transactions and plans together and rank them against `query`."""
        if not should_search(query):
            return not_searching(query)

        transactions, plans = await asyncio.gather(
            asyncio.to_thread(self.transaction_service.list_transactions),
            asyncio.to_thread(self.savings_service.list_plans),
        )
        return search_records(query, transactions, plans)

    async def debounced_search(self, query: str, client_key: str) -> Optional[SearchResult]:
        """
        Search after the debounce delay, debouncing each client separately.
        Returns None if the same client sent a newer query before this one's
        delay elapsed or before its results came back.
        """
        debouncer = self._debouncers.setdefault(client_key, Debouncer(self.debounce_seconds))
        ticket = await debouncer.wait()
        if ticket is None:
            return None
        try:
            result = await self.search(query)
        finally:
            if debouncer.is_current(ticket) and self._debouncers.get(client_key) is debouncer:
                del self._debouncers[client_key]
        if not debouncer.is_current(ticket):
            return None
        return result

    def dashboard(self, period: str = WEEKLY, chart_period: str = WEEKLY) -> Dashboard:
        """Derive every dashboard view from the installed snapshot."""
        return build_dashboard(
            self.snapshot.transactions,
            self.snapshot.savings_plans,
            self.snapshot.spending_limits,
            period=period,
            chart_period=chart_period,
            now=self.clock(),
        )
