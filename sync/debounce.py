"""
sync/debounce.py
----------------
Debouncing for bursts of calls such as search-as-you-type.
Only the most recent call in a burst gets through; earlier ones are dropped.
"""

import asyncio
from typing import Optional

from utils.logger import get_logger

logger = get_logger(__name__)


class Debouncer:
    """
    Hands out tickets and lets a ticket through only if no newer ticket
    was issued while it waited.

    Behavior:
        - Each call to `wait()` supersedes every earlier, still-waiting call.
        - A superseded call returns None immediately after its delay.
    """

    def __init__(self, delay_seconds: float):
        self.delay_seconds = delay_seconds
        self._latest = 0

    def is_current(self, ticket: int) -> bool:
        return ticket == self._latest

    async def wait(self) -> Optional[int]:
        """Sleep for the delay; return the ticket if still current, else None."""
        self._latest += 1
        ticket = self._latest
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        if not self.is_current(ticket):
            logger.debug(f"Debounced call #{ticket} superseded by #{self._latest}")
            return None
        return ticket

