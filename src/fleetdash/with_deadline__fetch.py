"""Bounded waits for backend reads."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable

from fleetdash.errors import FetchTimeoutError
from fleetdash.utils.logger import get_logger

logger = get_logger(__name__)


async def with_deadline[T](awaitable: Awaitable[T], timeout_s: float | None, resource: str) -> T:
    """Await ``awaitable``, cancelling it and raising FetchTimeoutError after ``timeout_s``.

    ``None`` or a non-positive timeout waits indefinitely.
    """
    if not timeout_s or timeout_s <= 0:
        return await awaitable
    deadline = asyncio.timeout(timeout_s)
    try:
        async with deadline:
            return await awaitable
    except TimeoutError as exc:
        if not deadline.expired():
            raise
        logger.warning("Fetching %s exceeded %.1fs deadline", resource, timeout_s)
        raise FetchTimeoutError(resource, timeout_s) from exc
