from __future__ import annotations

from collections.abc import Iterable

from fleetdash.models.trip_record import TripExpenseRow


def sum_expenses_by_trip(rows: Iterable[TripExpenseRow]) -> dict[str, float]:
    """Total expense amounts per trip id; trips without expenses are absent."""
    totals: dict[str, float] = {}
    for row in rows:
        totals[row.trip_id] = totals.get(row.trip_id, 0.0) + row.amount
    return totals
