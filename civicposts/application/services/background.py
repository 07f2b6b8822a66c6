"""
Fire-and-forget side effects.

The primary operation never awaits these tasks; failures are logged and
dropped.
"""

import asyncio
import logging
from typing import Awaitable, Set

logger = logging.getLogger(__name__)


class SideEffectRunner:
    """
    Schedules best-effort coroutines (view counter, CDN cleanup).

    Usage:
        runner = SideEffectRunner()
        runner.fire(repository.increment_views(article.id), "views")
    """

    def __init__(self):
        # Strong references so pending tasks are not garbage collected.
        self._tasks: Set[asyncio.Task] = set()

    def fire(self, coro: Awaitable, description: str) -> asyncio.Task:
        task = asyncio.ensure_future(self._guard(coro, description))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guard(self, coro: Awaitable, description: str) -> None:
        try:
            await coro
        except Exception as e:
            logger.error(f"[SideEffect] {description} failed: {e}")

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every scheduled task (shutdown, tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
