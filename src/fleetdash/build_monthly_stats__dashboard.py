"""Trailing six-month trip and expense series for the dashboard."""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime, tzinfo

from fleetdash.models.dashboard_stats import MonthlyStat
from fleetdash.models.trip_record import ExpenseRow, TripStatsRow
from fleetdash.utils.now import Now

MONTHLY_WINDOW = 6
MONTH_LABELS = (
    "Янв",
    "Фев",
    "Март",
    "Апр",
    "Май",
    "Июнь",
    "Июль",
    "Авг",
    "Сент",
    "Окт",
    "Ноя",
    "Дек",
)

YearMonth = tuple[int, int]


def trailing_months(now: datetime, count: int = MONTHLY_WINDOW) -> list[YearMonth]:
    """Return ``count`` (year, month) pairs ending at ``now``'s month, oldest first."""
    current = now.year * 12 + (now.month - 1)
    months: list[YearMonth] = []
    for offset in range(count - 1, -1, -1):
        year, month_index = divmod(current - offset, 12)
        months.append((year, month_index + 1))
    return months


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def build_monthly_stats(
    trips: Sequence[TripStatsRow],
    expenses: Sequence[ExpenseRow],
    now: datetime,
    tz: tzinfo,
) -> list[MonthlyStat]:
    """Bucket trips by creation month and expenses by expense month.

    Only the months in the trailing window are accumulated; older or future
    records are skipped. Months without records yield zeroed entries.
    """
    months = trailing_months(Now.to_zone(now, tz))
    window = set(months)

    trip_count: dict[YearMonth, int] = defaultdict(int)
    revenue: dict[YearMonth, float] = defaultdict(float)
    weight: dict[YearMonth, float] = defaultdict(float)
    expense_total: dict[YearMonth, float] = defaultdict(float)

    for trip in trips:
        if trip.created_at is None:
            continue
        created = Now.to_zone(trip.created_at, tz)
        key = (created.year, created.month)
        if key not in window:
            continue
        trip_count[key] += 1
        revenue[key] += trip.cargo_value
        weight[key] += trip.cargo_weight

    for expense in expenses:
        if expense.expense_date is None:
            continue
        key = (expense.expense_date.year, expense.expense_date.month)
        if key in window:
            expense_total[key] += expense.amount

    return [
        MonthlyStat(
            month=MONTH_LABELS[month - 1],
            period=f"{year:04d}-{month:02d}",
            trips=trip_count[(year, month)],
            revenue=revenue[(year, month)],
            weight=_round_half_up(weight[(year, month)] / 1000),
            expenses=expense_total[(year, month)],
        )
        for year, month in months
    ]
