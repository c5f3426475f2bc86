"""Trip list items as served to the trips screen."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from pydantic import ConfigDict

from fleetdash.models.camel_model import CamelModel
from fleetdash.models.trip_record import Amount, TripStatus

TRIP_PAGE_COLUMNS = (
    "id",
    "status",
    "departure_date",
    "arrival_date",
    "point_a",
    "point_b",
    "contractor_id",
    "driver_name",
    "driver_phone",
    "driver_license",
    "vehicle_brand",
    "vehicle_model",
    "vehicle_license_plate",
    "vehicle_capacity",
    "cargo_description",
    "cargo_weight",
    "cargo_volume",
    "cargo_value",
    "comments",
    "created_at",
)


class TripDriver(CamelModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    phone: str | None = None
    license: str | None = None


class TripVehicle(CamelModel):
    model_config = ConfigDict(frozen=True)

    brand: str | None = None
    model: str | None = None
    license_plate: str | None = None
    capacity: float | None = None


class TripCargo(CamelModel):
    model_config = ConfigDict(frozen=True)

    description: str | None = None
    weight: Amount = 0.0
    volume: Amount = 0.0
    value: Amount = 0.0


class Trip(CamelModel):
    """A trip with its driver, vehicle and cargo details grouped."""

    model_config = ConfigDict(frozen=True)

    id: str
    status: TripStatus
    departure_date: datetime
    arrival_date: datetime | None = None
    point_a: str | None = None
    point_b: str | None = None
    contractor_id: str | None = None
    driver: TripDriver
    vehicle: TripVehicle
    cargo: TripCargo
    comments: str | None = None
    created_at: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> Trip:
        """Build a Trip from a flat ``trips`` table row."""
        return cls.model_validate(
            {
                "id": row.get("id"),
                "status": TripStatus.normalize(row.get("status")),
                "departure_date": row.get("departure_date"),
                "arrival_date": row.get("arrival_date") or None,
                "point_a": row.get("point_a"),
                "point_b": row.get("point_b"),
                "contractor_id": row.get("contractor_id"),
                "driver": {
                    "name": row.get("driver_name"),
                    "phone": row.get("driver_phone"),
                    "license": row.get("driver_license"),
                },
                "vehicle": {
                    "brand": row.get("vehicle_brand"),
                    "model": row.get("vehicle_model"),
                    "license_plate": row.get("vehicle_license_plate"),
                    "capacity": row.get("vehicle_capacity"),
                },
                "cargo": {
                    "description": row.get("cargo_description"),
                    "weight": row.get("cargo_weight"),
                    "volume": row.get("cargo_volume"),
                    "value": row.get("cargo_value"),
                },
                "comments": row.get("comments"),
                "created_at": row.get("created_at"),
            }
        )
