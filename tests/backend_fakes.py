from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from fleetdash.define_settings__config import Settings
from fleetdash.errors import FetchError


@dataclass
class FakeBackend:
    """In-memory LogisticsBackend that records every call."""

    user_id: str | None = "user-1"
    trips: list[dict] = field(default_factory=list)
    expenses: list[dict] = field(default_factory=list)
    trip_expenses: list[dict] = field(default_factory=list)
    trip_rows: list[dict] = field(default_factory=list)
    counts: dict[str, int] = field(
        default_factory=lambda: {"contractors": 0, "drivers": 0, "vehicles": 0}
    )
    fail_on: set[str] = field(default_factory=set)
    delay_s: float = 0.0
    hang_on: set[str] = field(default_factory=set)
    calls: Counter = field(default_factory=Counter)
    cancelled: Counter = field(default_factory=Counter)
    requested_trip_ids: list[list[str]] = field(default_factory=list)

    async def _enter(self, name: str) -> None:
        self.calls[name] += 1
        if name in self.hang_on:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled[name] += 1
                raise
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        else:
            await asyncio.sleep(0)
        if name in self.fail_on:
            raise FetchError(f"{name} unavailable", resource=name)

    async def get_user_id(self) -> str | None:
        await self._enter("get_user_id")
        return self.user_id

    async def fetch_trip_stats_rows(self, user_id: str) -> list[dict]:
        await self._enter("trips")
        return list(self.trips)

    async def fetch_expense_rows(self, user_id: str) -> list[dict]:
        await self._enter("expenses")
        return list(self.expenses)

    async def count_rows(self, table: str, user_id: str) -> int:
        await self._enter(table)
        return self.counts.get(table, 0)

    async def fetch_trip_expense_rows(self, trip_ids: Sequence[str]) -> list[dict]:
        await self._enter("trip_expenses")
        self.requested_trip_ids.append(list(trip_ids))
        wanted = set(trip_ids)
        return [row for row in self.trip_expenses if row["trip_id"] in wanted]

    async def fetch_trip_rows(self, limit: int, offset: int) -> list[dict]:
        await self._enter("trip_rows")
        return list(self.trip_rows[offset : offset + limit])


def make_settings(**overrides: object) -> Settings:
    settings = Settings()
    settings.timezone = "UTC"
    for name, value in overrides.items():
        setattr(settings, name, value)
    return settings


def trip_row(trip_id: str, created_at: str = "2026-10-05T09:00:00+00:00", **extra: object) -> dict:
    row = {
        "id": trip_id,
        "status": "planned",
        "departure_date": "2026-10-06T08:00:00+00:00",
        "arrival_date": None,
        "point_a": "Москва",
        "point_b": "Казань",
        "contractor_id": "contractor-1",
        "driver_name": "Иванов И.И.",
        "driver_phone": "+7 900 000-00-00",
        "driver_license": "77 12 345678",
        "vehicle_brand": "КАМАЗ",
        "vehicle_model": "54901",
        "vehicle_license_plate": "А123ВС77",
        "vehicle_capacity": 20000,
        "cargo_description": "Стройматериалы",
        "cargo_weight": 12000,
        "cargo_volume": 40,
        "cargo_value": 150000,
        "comments": None,
        "created_at": created_at,
    }
    row.update(extra)
    return row
