"""Record and payload models for fleetdash."""

from fleetdash.models.dashboard_stats import DashboardStats, EntityCounts, MonthlyStat
from fleetdash.models.trip import Trip
from fleetdash.models.trip_record import (
    ExpenseRow,
    TripExpenseRow,
    TripStatsRow,
    TripStatus,
    parse_rows,
)

__all__ = [
    "DashboardStats",
    "EntityCounts",
    "ExpenseRow",
    "MonthlyStat",
    "Trip",
    "TripExpenseRow",
    "TripStatsRow",
    "TripStatus",
    "parse_rows",
]
