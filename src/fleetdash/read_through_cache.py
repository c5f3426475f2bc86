"""Cache lookup in front of deduplicated computations."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Hashable

from fleetdash.request_deduplicator import RequestDeduplicator
from fleetdash.ttl_cache import TtlCache
from fleetdash.utils.logger import get_logger

logger = get_logger(__name__)


class ReadThroughCache:
    """Serve values from the TTL cache, computing each missing key at most once at a time."""

    def __init__(
        self,
        cache: TtlCache | None = None,
        deduplicator: RequestDeduplicator | None = None,
    ) -> None:
        self.cache = TtlCache() if cache is None else cache
        self.deduplicator = RequestDeduplicator() if deduplicator is None else deduplicator

    async def get_or_compute[T](
        self,
        key: Hashable,
        compute: Callable[[], Awaitable[T]],
        ttl_s: float | None = None,
    ) -> T:
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached  # type: ignore[return-value]
        logger.debug("Cache miss: %s", key)

        async def compute_and_store() -> T:
            value = await compute()
            self.cache.set(key, value, ttl_s)
            return value

        return await self.deduplicator.run(key, compute_and_store)

    def invalidate_all(self) -> None:
        """Clear every cached value; computations already in flight may still store theirs."""
        self.cache.invalidate_all()
