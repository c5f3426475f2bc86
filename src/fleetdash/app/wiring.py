"""Default dependency wiring for use-cases."""

from __future__ import annotations

from dataclasses import dataclass

from fleetdash.app.use_cases.dashboard import DashboardUseCase, build_dashboard_use_case
from fleetdash.connection_optimizer import ConnectionOptimizer
from fleetdash.define_settings__config import Settings
from fleetdash.infra.clients.supabase_backend import create_supabase_backend
from fleetdash.ports.logistics_backend import LogisticsBackend


@dataclass
class AppServices:
    """Long-lived services shared by every request."""

    settings: Settings
    dashboard: DashboardUseCase
    connection_optimizer: ConnectionOptimizer


def build_services(settings: Settings, backend: LogisticsBackend) -> AppServices:
    dashboard = build_dashboard_use_case(backend, settings)
    return AppServices(
        settings=settings,
        dashboard=dashboard,
        connection_optimizer=ConnectionOptimizer(dashboard=dashboard, settings=settings),
    )


async def build_default_services(settings: Settings) -> AppServices:
    """Connect to the configured Supabase project and build the services around it."""
    backend = await create_supabase_backend(
        settings.supabase.url,
        settings.supabase.key,
        email=settings.supabase.email,
        password=settings.supabase.password,
    )
    return build_services(settings, backend)
