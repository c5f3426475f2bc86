"""Application use-case layer."""

from fleetdash.app.use_cases.dashboard import DashboardUseCase, build_dashboard_use_case

__all__ = ["DashboardUseCase", "build_dashboard_use_case"]
