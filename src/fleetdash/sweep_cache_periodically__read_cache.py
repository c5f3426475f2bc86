"""Background sweep of expired cache entries."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from fleetdash.ttl_cache import TtlCache
from fleetdash.utils.logger import get_logger

logger = get_logger(__name__)


async def sweep_cache_periodically(
    cache: TtlCache,
    interval_s: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Purge expired entries every ``interval_s`` seconds until cancelled."""
    while True:
        await sleep(interval_s)
        purged = cache.purge_expired()
        if purged:
            logger.debug("Swept %d expired cache entries", purged)
