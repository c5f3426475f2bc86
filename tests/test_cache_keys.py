"""Tests for cache key builders."""

from __future__ import annotations

from fleetdash.build_cache_key__read_cache import (
    dashboard_stats_key,
    normalize_trip_ids,
    trip_expenses_batch_key,
    trips_page_key,
)


def test_trip_expenses_batch_key_ignores_order() -> None:
    assert trip_expenses_batch_key(["b", "a"]) == trip_expenses_batch_key(["a", "b"])


def test_trip_expenses_batch_key_collapses_duplicates() -> None:
    assert trip_expenses_batch_key(["a", "b", "a"]) == "trip-expenses-batch-a,b"


def test_normalize_trip_ids_drops_blank_ids() -> None:
    assert normalize_trip_ids([" b", "", "a", "b"]) == ["a", "b"]


def test_trips_page_key_encodes_paging() -> None:
    assert trips_page_key("u", 100, 0) != trips_page_key("u", 100, 100)
    assert trips_page_key("u", 20, 0) != trips_page_key("u", 100, 0)


def test_keys_are_scoped_to_principal() -> None:
    assert dashboard_stats_key("u1") != dashboard_stats_key("u2")
    assert trips_page_key("u1", 100, 0) != trips_page_key("u2", 100, 0)
