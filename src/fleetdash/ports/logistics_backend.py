"""Port interface for the hosted logistics backend."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal, Protocol

CountedTable = Literal["contractors", "drivers", "vehicles"]
Row = dict[str, object]


class LogisticsBackend(Protocol):
    """Read-only queries the dashboard core issues against the backend.

    Row-level scoping is enforced by the backend; ``user_id`` narrows queries
    to the authenticated principal's records.
    """

    async def get_user_id(self) -> str | None:
        """Return the authenticated principal's id, or None when signed out."""

    async def fetch_trip_stats_rows(self, user_id: str) -> list[Row]:
        """Return id, status, cargo value/weight/volume and created_at for every trip."""

    async def fetch_expense_rows(self, user_id: str) -> list[Row]:
        """Return amount and expense_date for every expense line item."""

    async def count_rows(self, table: CountedTable, user_id: str) -> int:
        """Return how many rows of ``table`` belong to the principal."""

    async def fetch_trip_expense_rows(self, trip_ids: Sequence[str]) -> list[Row]:
        """Return trip_id and amount for every expense of the given trips."""

    async def fetch_trip_rows(self, limit: int, offset: int) -> list[Row]:
        """Return one page of full trip rows, newest first."""
