"""fleetdash package entrypoints."""

import uvicorn

from fleetdash.app.use_cases.dashboard import DashboardUseCase, build_dashboard_use_case
from fleetdash.config import get_settings
from fleetdash.models import DashboardStats, MonthlyStat, Trip
from fleetdash.read_through_cache import ReadThroughCache
from fleetdash.request_deduplicator import RequestDeduplicator
from fleetdash.ttl_cache import TtlCache


def main() -> None:
    """Serve the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "fleetdash.api:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


__all__ = [
    "DashboardStats",
    "DashboardUseCase",
    "MonthlyStat",
    "ReadThroughCache",
    "RequestDeduplicator",
    "Trip",
    "TtlCache",
    "build_dashboard_use_case",
    "main",
]
