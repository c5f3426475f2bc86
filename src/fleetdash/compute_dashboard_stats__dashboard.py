"""Aggregate raw trip and expense rows into a dashboard snapshot."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import datetime, tzinfo

from fleetdash.build_monthly_stats__dashboard import build_monthly_stats
from fleetdash.models.dashboard_stats import DashboardStats, EntityCounts
from fleetdash.models.trip_record import ExpenseRow, TripStatsRow, TripStatus


def _ratio(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def count_trips_by_status(trips: Sequence[TripStatsRow]) -> Counter[TripStatus]:
    return Counter(trip.status for trip in trips)


def compute_dashboard_stats(
    trips: Sequence[TripStatsRow],
    expenses: Sequence[ExpenseRow],
    counts: EntityCounts,
    now: datetime,
    tz: tzinfo,
) -> DashboardStats:
    """Compute the dashboard snapshot.

    Revenue-side figures (profit, margin, average cargo value) use completed
    trips only, while ``total_expenses`` covers every expense line regardless
    of trip status.
    """
    by_status = count_trips_by_status(trips)
    total_trips = len(trips)
    completed_trips = by_status[TripStatus.COMPLETED]

    total_cargo_value = sum(trip.cargo_value for trip in trips)
    completed_cargo_value = sum(
        trip.cargo_value for trip in trips if trip.status is TripStatus.COMPLETED
    )
    total_expenses = sum(expense.amount for expense in expenses)
    profit = completed_cargo_value - total_expenses

    return DashboardStats(
        active_trips=by_status[TripStatus.IN_PROGRESS],
        total_trips=total_trips,
        completed_trips=completed_trips,
        planned_trips=by_status[TripStatus.PLANNED],
        cancelled_trips=by_status[TripStatus.CANCELLED],
        unknown_trips=by_status[TripStatus.UNKNOWN],
        contractors=counts.contractors,
        drivers=counts.drivers,
        vehicles=counts.vehicles,
        total_cargo_value=total_cargo_value,
        completed_cargo_value=completed_cargo_value,
        total_weight=sum(trip.cargo_weight for trip in trips),
        total_volume=sum(trip.cargo_volume for trip in trips),
        total_expenses=total_expenses,
        profit=profit,
        profit_margin=_ratio(profit, completed_cargo_value) * 100,
        completion_rate=_ratio(completed_trips, total_trips) * 100,
        average_cargo_value=_ratio(completed_cargo_value, completed_trips),
        monthly_stats=tuple(build_monthly_stats(trips, expenses, now, tz)),
    )
