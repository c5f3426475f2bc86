"""Supabase (PostgREST) adapter for the logistics backend port."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from itertools import batched

import httpx
from postgrest import APIError
from postgrest.types import CountMethod
from supabase import AsyncClient, AuthError, AuthRetryableError, acreate_client

from fleetdash.errors import FetchError, NotAuthenticatedError
from fleetdash.models.trip import TRIP_PAGE_COLUMNS
from fleetdash.ports.logistics_backend import CountedTable, Row
from fleetdash.utils.logger import get_logger

logger = get_logger(__name__)

TRIP_STATS_COLUMNS = "id, status, cargo_value, cargo_weight, cargo_volume, created_at"
EXPENSE_COLUMNS = "amount, expense_date"
TRIP_EXPENSE_COLUMNS = "trip_id, amount"
# PostgREST caps responses at 1000 rows unless the project overrides it.
DEFAULT_PAGE_SIZE = 1000
DEFAULT_ID_BATCH_SIZE = 50


class SupabaseBackend:
    """Reads trips, expenses and reference counts through a signed-in AsyncClient."""

    def __init__(
        self,
        client: AsyncClient,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        id_batch_size: int = DEFAULT_ID_BATCH_SIZE,
    ) -> None:
        self._client = client
        self.page_size = page_size
        self.id_batch_size = id_batch_size

    async def get_user_id(self) -> str | None:
        """Return the signed-in user's id from the locally held session.

        The session is only sent to the auth service when its access token
        has expired and needs a refresh.
        """
        try:
            session = await self._client.auth.get_session()
        except AuthRetryableError as exc:
            raise FetchError(f"Auth service unavailable: {exc}", resource="auth") from exc
        except AuthError as exc:
            raise NotAuthenticatedError(str(exc)) from exc
        if session is None or session.user is None:
            return None
        return session.user.id

    async def fetch_trip_stats_rows(self, user_id: str) -> list[Row]:
        return await self._fetch_all(
            "trips",
            lambda: self._client.table("trips")
            .select(TRIP_STATS_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at"),
        )

    async def fetch_expense_rows(self, user_id: str) -> list[Row]:
        return await self._fetch_all(
            "trip_expenses",
            lambda: self._client.table("trip_expenses")
            .select(EXPENSE_COLUMNS)
            .eq("user_id", user_id)
            .order("expense_date"),
        )

    async def count_rows(self, table: CountedTable, user_id: str) -> int:
        query = (
            self._client.table(table)
            .select("id", count=CountMethod.exact, head=True)
            .eq("user_id", user_id)
        )
        response = await self._send(table, query.execute)
        return getattr(response, "count", None) or 0

    async def fetch_trip_expense_rows(self, trip_ids: Sequence[str]) -> list[Row]:
        """Fetch expenses in id batches so the ``in.(...)`` filter stays within URL limits."""
        chunks = [list(chunk) for chunk in batched(trip_ids, self.id_batch_size)]
        results = await asyncio.gather(
            *(
                self._fetch_all(
                    "trip_expenses",
                    lambda chunk=chunk: self._client.table("trip_expenses")
                    .select(TRIP_EXPENSE_COLUMNS)
                    .in_("trip_id", chunk)
                    .order("trip_id"),
                )
                for chunk in chunks
            )
        )
        return [row for rows in results for row in rows]

    async def fetch_trip_rows(self, limit: int, offset: int) -> list[Row]:
        query = (
            self._client.table("trips")
            .select(", ".join(TRIP_PAGE_COLUMNS))
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
        )
        return await self._execute("trips", query.execute)

    async def _fetch_all(self, resource: str, build_query: Callable[[], object]) -> list[Row]:
        """Page through ``range`` windows until a short page is returned."""
        rows: list[Row] = []
        start = 0
        while True:
            query = build_query().range(start, start + self.page_size - 1)  # type: ignore[attr-defined]
            page = await self._execute(resource, query.execute)
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            start += self.page_size

    async def _execute(
        self,
        resource: str,
        execute: Callable[[], Awaitable[object]],
    ) -> list[Row]:
        response = await self._send(resource, execute)
        return list(getattr(response, "data", None) or [])

    async def _send(
        self,
        resource: str,
        execute: Callable[[], Awaitable[object]],
    ) -> object:
        try:
            return await execute()
        except APIError as exc:
            logger.warning("Backend rejected %s query: %s", resource, exc.message)
            raise FetchError(f"Failed to fetch {resource}: {exc.message}", resource=resource) from exc
        except httpx.HTTPError as exc:
            logger.warning("Transport error fetching %s: %s", resource, exc)
            raise FetchError(f"Failed to fetch {resource}: {exc}", resource=resource) from exc


async def create_supabase_backend(
    url: str,
    key: str,
    *,
    email: str | None = None,
    password: str | None = None,
) -> SupabaseBackend:
    """Create an AsyncClient, sign in when credentials are given, and wrap it."""
    client = await acreate_client(url, key)
    if email and password:
        try:
            await client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as exc:
            raise NotAuthenticatedError(f"Sign-in failed for {email}: {exc}") from exc
        logger.info("Signed in to %s as %s", url, email)
    return SupabaseBackend(client)
