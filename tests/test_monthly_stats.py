import unittest
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from fleetdash.build_monthly_stats__dashboard import (
    MONTH_LABELS,
    build_monthly_stats,
    trailing_months,
)
from fleetdash.models.trip_record import ExpenseRow, TripStatsRow, parse_rows

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


class TrailingMonthsTests(unittest.TestCase):
    def test_window_ends_at_current_month_oldest_first(self) -> None:
        self.assertEqual(
            trailing_months(NOW),
            [(2026, 5), (2026, 6), (2026, 7), (2026, 8), (2026, 9), (2026, 10)],
        )

    def test_window_crosses_year_boundary(self) -> None:
        self.assertEqual(
            trailing_months(datetime(2026, 2, 3, tzinfo=UTC)),
            [(2025, 9), (2025, 10), (2025, 11), (2025, 12), (2026, 1), (2026, 2)],
        )


class BuildMonthlyStatsTests(unittest.TestCase):
    def test_empty_history_yields_six_zero_buckets(self) -> None:
        stats = build_monthly_stats([], [], NOW, UTC)

        self.assertEqual(len(stats), 6)
        self.assertEqual([stat.month for stat in stats], list(MONTH_LABELS[4:10]))
        for stat in stats:
            self.assertEqual((stat.trips, stat.revenue, stat.weight, stat.expenses), (0, 0, 0, 0))

    def test_five_years_of_history_still_yields_six_buckets(self) -> None:
        rows = [
            {
                "status": "completed",
                "cargo_value": 100,
                "created_at": f"{year}-{month:02d}-15T10:00:00+00:00",
            }
            for year in range(2021, 2027)
            for month in range(1, 13)
        ]
        trips = parse_rows(TripStatsRow, rows, "trip")

        stats = build_monthly_stats(trips, [], NOW, UTC)

        self.assertEqual(len(stats), 6)
        self.assertEqual([stat.trips for stat in stats], [1] * 6)
        self.assertEqual(stats[-1].period, "2026-10")
        self.assertEqual(stats[0].period, "2026-05")

    def test_buckets_trips_and_expenses_by_month(self) -> None:
        trips = parse_rows(
            TripStatsRow,
            [
                {"cargo_value": 1000, "cargo_weight": 1499, "created_at": "2026-09-02T08:00:00Z"},
                {"cargo_value": 500, "cargo_weight": 1001, "created_at": "2026-09-30T08:00:00Z"},
                {"cargo_value": 300, "cargo_weight": 2000, "created_at": "2026-10-01T08:00:00Z"},
                {"cargo_value": 900, "created_at": None},
            ],
            "trip",
        )
        expenses = parse_rows(
            ExpenseRow,
            [
                {"amount": 120, "expense_date": "2026-09-15"},
                {"amount": 80, "expense_date": "2026-10-02"},
                {"amount": 999, "expense_date": "2025-10-02"},
                {"amount": 5, "expense_date": None},
            ],
            "expense",
        )

        stats = {stat.period: stat for stat in build_monthly_stats(trips, expenses, NOW, UTC)}

        self.assertEqual(stats["2026-09"].trips, 2)
        self.assertEqual(stats["2026-09"].revenue, 1500)
        self.assertEqual(stats["2026-09"].weight, 3)
        self.assertEqual(stats["2026-09"].expenses, 120)
        self.assertEqual(stats["2026-10"].trips, 1)
        self.assertEqual(stats["2026-10"].weight, 2)
        self.assertEqual(stats["2026-10"].expenses, 80)
        self.assertEqual(stats["2026-08"].trips, 0)

    def test_weight_rounds_half_up_to_tonnes(self) -> None:
        trips = parse_rows(
            TripStatsRow,
            [{"cargo_weight": 2500, "created_at": "2026-10-05T08:00:00Z"}],
            "trip",
        )

        stats = build_monthly_stats(trips, [], NOW, UTC)

        self.assertEqual(stats[-1].weight, 3)

    def test_created_at_is_bucketed_in_configured_timezone(self) -> None:
        trips = parse_rows(
            TripStatsRow,
            [{"created_at": "2026-09-30T22:30:00+00:00"}],
            "trip",
        )

        moscow = build_monthly_stats(trips, [], NOW, ZoneInfo("Europe/Moscow"))
        utc = build_monthly_stats(trips, [], NOW, UTC)

        self.assertEqual({stat.period: stat.trips for stat in moscow}["2026-10"], 1)
        self.assertEqual({stat.period: stat.trips for stat in utc}["2026-09"], 1)

    def test_future_records_are_ignored(self) -> None:
        trips = parse_rows(
            TripStatsRow,
            [{"created_at": "2026-11-02T08:00:00Z"}],
            "trip",
        )

        stats = build_monthly_stats(trips, [], NOW, UTC)

        self.assertEqual(sum(stat.trips for stat in stats), 0)


if __name__ == "__main__":
    unittest.main()
