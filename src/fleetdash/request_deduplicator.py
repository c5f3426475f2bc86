"""Single-flight execution of concurrent requests for the same key."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from functools import partial

from fleetdash.utils.logger import get_logger

logger = get_logger(__name__)


class RequestDeduplicator:
    """Share one in-flight computation among every caller asking for the same key.

    The first caller for a key starts the computation; callers arriving before
    it settles await the same task and observe the same value or exception.
    The registration is dropped as soon as the task settles, whatever the
    outcome, so the next call starts fresh. Failures are not retried.
    """

    def __init__(self) -> None:
        self._in_flight: dict[Hashable, asyncio.Future] = {}

    async def run[T](self, key: Hashable, compute: Callable[[], Awaitable[T]]) -> T:
        task = self._in_flight.get(key)
        if task is None or task.done():
            task = asyncio.ensure_future(compute())
            self._in_flight[key] = task
            task.add_done_callback(partial(self._release, key))
        else:
            logger.debug("Joining in-flight request: %s", key)
        # A cancelled waiter must not cancel the computation other waiters share.
        return await asyncio.shield(task)

    def in_flight(self, key: Hashable) -> bool:
        task = self._in_flight.get(key)
        return task is not None and not task.done()

    def _release(self, key: Hashable, task: asyncio.Future) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        if not task.cancelled() and task.exception() is not None:
            logger.debug("In-flight request failed: %s (%s)", key, task.exception())

    def __len__(self) -> int:
        return sum(1 for task in self._in_flight.values() if not task.done())
