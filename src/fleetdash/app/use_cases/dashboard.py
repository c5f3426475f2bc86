"""Use cases behind the dashboard and trips screens."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from fleetdash.build_cache_key__read_cache import (
    CURRENT_USER_KEY,
    dashboard_stats_key,
    normalize_trip_ids,
    trip_expenses_batch_key,
    trips_page_key,
)
from fleetdash.compute_dashboard_stats__dashboard import compute_dashboard_stats
from fleetdash.define_settings__config import Settings
from fleetdash.errors import NotAuthenticatedError, RecordValidationError
from fleetdash.models.dashboard_stats import DashboardStats, EntityCounts
from fleetdash.models.trip import Trip
from fleetdash.models.trip_record import ExpenseRow, TripExpenseRow, TripStatsRow, parse_rows
from fleetdash.ports.logistics_backend import LogisticsBackend
from fleetdash.read_through_cache import ReadThroughCache
from fleetdash.request_deduplicator import RequestDeduplicator
from fleetdash.sum_expenses_by_trip__expenses import sum_expenses_by_trip
from fleetdash.ttl_cache import TtlCache
from fleetdash.utils.logger import get_logger
from fleetdash.utils.now import Now
from fleetdash.with_deadline__fetch import with_deadline

logger = get_logger(__name__)

MAX_TRIPS_PAGE_LIMIT = 500


@dataclass
class DashboardUseCase:
    """Cached, deduplicated reads of dashboard statistics, trips and expense totals.

    One instance is built at application start and shared by every consumer;
    the cache and in-flight maps it owns are therefore process-wide.
    """

    backend: LogisticsBackend
    settings: Settings
    cache: ReadThroughCache = field(default_factory=ReadThroughCache)
    now: Callable[[], datetime] = Now.as_datetime
    compute_stats: Callable[..., DashboardStats] = compute_dashboard_stats

    async def get_dashboard_stats(self) -> DashboardStats:
        user_id = await self._require_user_id()
        return await self.cache.get_or_compute(
            dashboard_stats_key(user_id),
            lambda: self._load_dashboard_stats(user_id),
            self.settings.cache.dashboard_ttl_s,
        )

    async def get_trip_expenses_batch(self, trip_ids: Iterable[str]) -> dict[str, float]:
        """Return summed expenses per trip; trips without expenses are absent from the result."""
        ids = normalize_trip_ids(trip_ids)
        if not ids:
            return {}
        totals = await self.cache.get_or_compute(
            trip_expenses_batch_key(ids),
            lambda: self._load_trip_expenses(ids),
            self.settings.cache.expenses_batch_ttl_s,
        )
        return dict(totals)

    async def get_trips_page(self, limit: int = 100, offset: int = 0) -> list[Trip]:
        if not 1 <= limit <= MAX_TRIPS_PAGE_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_TRIPS_PAGE_LIMIT}")
        if offset < 0:
            raise ValueError("offset must be non-negative")
        user_id = await self._require_user_id()
        trips = await self.cache.get_or_compute(
            trips_page_key(user_id, limit, offset),
            lambda: self._load_trips_page(limit, offset),
            self.settings.cache.trips_page_ttl_s,
        )
        return list(trips)

    def invalidate_cache(self) -> None:
        """Drop every cached read after a write anywhere in the application."""
        logger.debug("Invalidating all cached reads")
        self.cache.invalidate_all()

    async def _require_user_id(self) -> str:
        # Concurrent callers share one principal lookup.
        user_id = await self.cache.deduplicator.run(
            CURRENT_USER_KEY,
            lambda: self._fetch(self.backend.get_user_id(), "auth"),
        )
        if not user_id:
            raise NotAuthenticatedError()
        return user_id

    async def _load_dashboard_stats(self, user_id: str) -> DashboardStats:
        try:
            async with asyncio.TaskGroup() as group:
                trip_rows = group.create_task(
                    self._fetch(self.backend.fetch_trip_stats_rows(user_id), "trips")
                )
                expense_rows = group.create_task(
                    self._fetch(self.backend.fetch_expense_rows(user_id), "trip_expenses")
                )
                contractors = group.create_task(
                    self._fetch(self.backend.count_rows("contractors", user_id), "contractors")
                )
                drivers = group.create_task(
                    self._fetch(self.backend.count_rows("drivers", user_id), "drivers")
                )
                vehicles = group.create_task(
                    self._fetch(self.backend.count_rows("vehicles", user_id), "vehicles")
                )
        except ExceptionGroup as failed:
            # Remaining fetches are already cancelled; surface the first failure.
            raise failed.exceptions[0] from None
        trips = parse_rows(TripStatsRow, trip_rows.result(), "trip")
        expenses = parse_rows(ExpenseRow, expense_rows.result(), "expense")
        stats = self.compute_stats(
            trips,
            expenses,
            EntityCounts(
                contractors=contractors.result(),
                drivers=drivers.result(),
                vehicles=vehicles.result(),
            ),
            self.now(),
            self.settings.tzinfo,
        )
        logger.info(
            "Computed dashboard stats for %s: %d trips, %d expenses",
            user_id,
            stats.total_trips,
            len(expenses),
        )
        return stats

    async def _load_trip_expenses(self, trip_ids: list[str]) -> dict[str, float]:
        rows = await self._fetch(self.backend.fetch_trip_expense_rows(trip_ids), "trip_expenses")
        return sum_expenses_by_trip(parse_rows(TripExpenseRow, rows, "trip expense"))

    async def _load_trips_page(self, limit: int, offset: int) -> tuple[Trip, ...]:
        rows = await self._fetch(self.backend.fetch_trip_rows(limit, offset), "trips")
        trips: list[Trip] = []
        for index, row in enumerate(rows):
            try:
                trips.append(Trip.from_row(row))
            except ValidationError as exc:
                raise RecordValidationError("trip", f"row {index}: {exc}") from exc
        return tuple(trips)

    async def _fetch[T](self, awaitable: Awaitable[T], resource: str) -> T:
        return await with_deadline(awaitable, self.settings.fetch_timeout_s, resource)


def build_dashboard_use_case(
    backend: LogisticsBackend,
    settings: Settings,
    **kwargs: Any,
) -> DashboardUseCase:
    """Build a use case with a cache sized and timed from settings."""
    cache = ReadThroughCache(
        TtlCache(
            default_ttl_s=settings.cache.default_ttl_s,
            max_entries=settings.cache.max_entries,
        ),
        RequestDeduplicator(),
    )
    return DashboardUseCase(backend=backend, settings=settings, cache=cache, **kwargs)


__all__ = ["DashboardUseCase", "build_dashboard_use_case"]
