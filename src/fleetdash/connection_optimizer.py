"""Connection-aware preloading and retries around the dashboard use case."""

from __future__ import annotations

import asyncio
import logging
import time as time_module
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass, field
from enum import StrEnum

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fleetdash.app.use_cases.dashboard import DashboardUseCase
from fleetdash.define_settings__config import Settings
from fleetdash.errors import FetchError
from fleetdash.models.dashboard_stats import DashboardStats
from fleetdash.models.trip import Trip
from fleetdash.request_deduplicator import RequestDeduplicator
from fleetdash.utils.logger import get_logger

logger = get_logger(__name__)

FAST_LATENCY_S = 0.5
SLOW_LATENCY_S = 2.0
SLOW_PRELOAD_TRIPS = 20
FAST_PRELOAD_TRIPS = 100


class ConnectionQuality(StrEnum):
    FAST = "fast"
    SLOW = "slow"
    VERY_SLOW = "very_slow"


def classify_latency(latency_s: float) -> ConnectionQuality:
    if latency_s < FAST_LATENCY_S:
        return ConnectionQuality.FAST
    if latency_s < SLOW_LATENCY_S:
        return ConnectionQuality.SLOW
    return ConnectionQuality.VERY_SLOW


@dataclass(frozen=True)
class PreloadResult:
    quality: ConnectionQuality
    stats: DashboardStats
    recent_trips: list[Trip] | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "connectionQuality": self.quality.value,
            "stats": self.stats.to_payload(),
            "recentTrips": (
                None
                if self.recent_trips is None
                else [trip.to_payload() for trip in self.recent_trips]
            ),
        }


@dataclass
class ConnectionOptimizer:
    """Probe backend latency and size the initial dashboard load to match it."""

    dashboard: DashboardUseCase
    settings: Settings
    http_client_factory: Callable[[], httpx.AsyncClient] = httpx.AsyncClient
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    clock: Callable[[], float] = time_module.perf_counter
    deduplicator: RequestDeduplicator = field(default_factory=RequestDeduplicator)

    async def check_connection_quality(self) -> ConnectionQuality:
        url = self.settings.supabase.rest_url
        start = self.clock()
        try:
            async with self.http_client_factory() as client:
                await client.head(
                    url,
                    headers={"apikey": self.settings.supabase.key},
                    timeout=self.settings.connection_probe_timeout_s,
                )
        except httpx.HTTPError as exc:
            logger.warning("Connection quality check against %s failed: %s", url, exc)
            return ConnectionQuality.VERY_SLOW
        quality = classify_latency(self.clock() - start)
        logger.debug("Connection quality: %s", quality)
        return quality

    async def with_retry[T](
        self,
        operation: Callable[[], Awaitable[T]],
        context: str = "operation",
    ) -> T:
        """Run ``operation``, retrying backend fetch failures with exponential backoff."""
        retry_settings = self.settings.retry
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(FetchError),
            stop=stop_after_attempt(retry_settings.attempts),
            wait=wait_exponential(
                multiplier=retry_settings.base_delay_s,
                max=retry_settings.max_delay_s,
            ),
            sleep=self.sleep,
            reraise=True,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        async for attempt in retrying:
            with attempt:
                logger.debug("%s attempt %d", context, attempt.retry_state.attempt_number)
                return await operation()
        raise AssertionError("unreachable")  # pragma: no cover

    async def batch_request[T](self, key: Hashable, operation: Callable[[], Awaitable[T]]) -> T:
        """Share one retrying execution of ``operation`` among concurrent callers of ``key``."""
        return await self.deduplicator.run(
            key,
            lambda: self.with_retry(operation, f"batch-{key}"),
        )

    async def preload_critical_data(self) -> PreloadResult:
        quality = await self.check_connection_quality()
        logger.info("Preloading dashboard data on a %s connection", quality)
        if quality is ConnectionQuality.VERY_SLOW:
            stats = await self.dashboard.get_dashboard_stats()
            return PreloadResult(quality=quality, stats=stats)
        limit = SLOW_PRELOAD_TRIPS if quality is ConnectionQuality.SLOW else FAST_PRELOAD_TRIPS
        stats, recent_trips = await asyncio.gather(
            self.dashboard.get_dashboard_stats(),
            self.dashboard.get_trips_page(limit),
        )
        return PreloadResult(quality=quality, stats=stats, recent_trips=recent_trips)
