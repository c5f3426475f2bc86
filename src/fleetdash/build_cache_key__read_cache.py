"""Cache keys for each distinct backend query shape."""

from __future__ import annotations

from collections.abc import Iterable

DASHBOARD_STATS_KEY_PREFIX = "dashboard-stats-optimized"
TRIP_EXPENSES_BATCH_KEY_PREFIX = "trip-expenses-batch"
TRIPS_PAGE_KEY_PREFIX = "trips-optimized"
CURRENT_USER_KEY = "current-user"


def normalize_trip_ids(trip_ids: Iterable[str]) -> list[str]:
    """Return the unique, sorted, non-empty trip ids."""
    return sorted({str(trip_id).strip() for trip_id in trip_ids} - {""})


def dashboard_stats_key(user_id: str) -> str:
    return f"{DASHBOARD_STATS_KEY_PREFIX}:{user_id}"


def trip_expenses_batch_key(trip_ids: Iterable[str]) -> str:
    # Sorted so that any permutation of the same id set shares one entry.
    return f"{TRIP_EXPENSES_BATCH_KEY_PREFIX}-{','.join(normalize_trip_ids(trip_ids))}"


def trips_page_key(user_id: str, limit: int, offset: int) -> str:
    return f"{TRIPS_PAGE_KEY_PREFIX}:{user_id}:{limit}:{offset}"
