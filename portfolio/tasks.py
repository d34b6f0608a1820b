# portfolio/tasks.py: fire-and-forget scheduling on the running loop
# --------------------------------------------------------------------

from __future__ import annotations
import asyncio
from typing import Awaitable, Coroutine, Iterable, List, Set

import structlog

logger = structlog.get_logger()


class BackgroundTasks:
    """Holds references to scheduled coroutines so they can be drained.

    With a running loop, spawn() returns immediately and the coroutine runs
    as a task. Without one there is nothing to yield to, so the coroutines
    passed in one call run concurrently in a single loop, and the call
    returns once they (and anything they spawned) have finished.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine) -> None:
        self.spawn_all([coro])

    def spawn_all(self, coros: Iterable[Coroutine]) -> None:
        coros = list(coros)
        if not coros:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._run_together(coros))
            return
        for coro in coros:
            task = loop.create_task(coro)
            self._tasks.add(task)
            task.add_done_callback(self._finished)

    async def _run_together(self, coros: List[Coroutine]) -> None:
        results = await asyncio.gather(*coros, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                logger.error("Background task failed", error=str(result))
        await self.drain()

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Background task failed", task=task.get_name(), error=str(task.exception()))

    async def drain(self) -> None:
        """Wait for every task, including ones spawned while waiting."""
        while True:
            pending: Set[Awaitable] = {t for t in self._tasks if not t.done()}
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)
