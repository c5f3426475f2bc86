"""Dashboard statistics snapshot models."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ConfigDict

from fleetdash.models.camel_model import CamelModel


@dataclass(frozen=True, slots=True)
class EntityCounts:
    """Row counts for the principal's reference entities."""

    contractors: int = 0
    drivers: int = 0
    vehicles: int = 0


class MonthlyStat(CamelModel):
    """One calendar month of the trailing dashboard series."""

    model_config = ConfigDict(frozen=True)

    month: str
    period: str
    trips: int = 0
    revenue: float = 0.0
    weight: int = 0
    expenses: float = 0.0


class DashboardStats(CamelModel):
    """Aggregated dashboard figures for one principal at one point in time."""

    model_config = ConfigDict(frozen=True)

    active_trips: int = 0
    total_trips: int = 0
    completed_trips: int = 0
    planned_trips: int = 0
    cancelled_trips: int = 0
    unknown_trips: int = 0
    contractors: int = 0
    drivers: int = 0
    vehicles: int = 0
    total_cargo_value: float = 0.0
    completed_cargo_value: float = 0.0
    total_weight: float = 0.0
    total_volume: float = 0.0
    total_expenses: float = 0.0
    profit: float = 0.0
    profit_margin: float = 0.0
    completion_rate: float = 0.0
    average_cargo_value: float = 0.0
    monthly_stats: tuple[MonthlyStat, ...] = ()
