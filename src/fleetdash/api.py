"""HTTP surface for the dashboard statistics core."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, cast

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware

from fleetdash.app.use_cases.dashboard import MAX_TRIPS_PAGE_LIMIT, DashboardUseCase
from fleetdash.app.wiring import AppServices, build_default_services
from fleetdash.config import get_settings
from fleetdash.connection_optimizer import ConnectionOptimizer
from fleetdash.errors import (
    FetchError,
    FetchTimeoutError,
    NotAuthenticatedError,
    RecordValidationError,
)
from fleetdash.require_api_token__request_auth import require_api_token
from fleetdash.sweep_cache_periodically__read_cache import sweep_cache_periodically
from fleetdash.utils.logger import get_logger, set_level

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    set_level(settings.log_level)
    services = await build_default_services(settings)
    app.state.services = services
    sweeper: asyncio.Task | None = None
    if settings.cache.sweep_interval_s > 0:
        sweeper = asyncio.create_task(
            sweep_cache_periodically(services.dashboard.cache.cache, settings.cache.sweep_interval_s)
        )
    logger.info("fleetdash API ready (backend %s)", settings.supabase.url)
    try:
        yield
    finally:
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper


app = FastAPI(
    title="fleetdash",
    version="0.1.0",
    lifespan=lifespan,
    dependencies=[Depends(require_api_token)],
    middleware=[
        Middleware(
            cast("type[object]", CORSMiddleware),
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
    ],
)


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def get_dashboard_use_case(
    services: Annotated[AppServices, Depends(get_services)],
) -> DashboardUseCase:
    return services.dashboard


def get_connection_optimizer(
    services: Annotated[AppServices, Depends(get_services)],
) -> ConnectionOptimizer:
    return services.connection_optimizer


class TripExpensesBatchRequest(BaseModel):
    trip_ids: list[str] = Field(default_factory=list, max_length=1000)


def _error_response(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.exception_handler(NotAuthenticatedError)
async def _not_authenticated(_request: Request, exc: NotAuthenticatedError) -> JSONResponse:
    return _error_response(status.HTTP_401_UNAUTHORIZED, str(exc))


@app.exception_handler(FetchTimeoutError)
async def _fetch_timeout(_request: Request, exc: FetchTimeoutError) -> JSONResponse:
    return _error_response(status.HTTP_504_GATEWAY_TIMEOUT, str(exc))


@app.exception_handler(FetchError)
async def _fetch_failed(_request: Request, exc: FetchError) -> JSONResponse:
    logger.warning("Backend fetch failed: %s", exc)
    return _error_response(status.HTTP_502_BAD_GATEWAY, str(exc))


@app.exception_handler(RecordValidationError)
async def _bad_record(_request: Request, exc: RecordValidationError) -> JSONResponse:
    logger.error("Backend returned an invalid record: %s", exc)
    return _error_response(status.HTTP_502_BAD_GATEWAY, f"Invalid {exc.record_type} data from backend")


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/dashboard/stats")
async def dashboard_stats(
    dashboard: Annotated[DashboardUseCase, Depends(get_dashboard_use_case)],
) -> dict[str, object]:
    stats = await dashboard.get_dashboard_stats()
    return stats.to_payload()


@app.get("/api/trips")
async def trips_page(
    dashboard: Annotated[DashboardUseCase, Depends(get_dashboard_use_case)],
    limit: int = Query(100, ge=1, le=MAX_TRIPS_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
) -> dict[str, object]:
    trips = await dashboard.get_trips_page(limit=limit, offset=offset)
    return {
        "limit": limit,
        "offset": offset,
        "trips": [trip.to_payload() for trip in trips],
    }


@app.post("/api/trips/expenses/batch")
async def trip_expenses_batch(
    payload: TripExpensesBatchRequest,
    dashboard: Annotated[DashboardUseCase, Depends(get_dashboard_use_case)],
) -> dict[str, object]:
    return {"expenses": await dashboard.get_trip_expenses_batch(payload.trip_ids)}


@app.post("/api/cache/invalidate")
def invalidate_cache(
    dashboard: Annotated[DashboardUseCase, Depends(get_dashboard_use_case)],
) -> dict[str, str]:
    dashboard.invalidate_cache()
    return {"status": "ok"}


@app.get("/api/connection/quality")
async def connection_quality(
    optimizer: Annotated[ConnectionOptimizer, Depends(get_connection_optimizer)],
) -> dict[str, str]:
    return {"quality": (await optimizer.check_connection_quality()).value}


@app.get("/api/dashboard/preload")
async def dashboard_preload(
    optimizer: Annotated[ConnectionOptimizer, Depends(get_connection_optimizer)],
) -> dict[str, object]:
    result = await optimizer.preload_critical_data()
    return result.to_payload()
