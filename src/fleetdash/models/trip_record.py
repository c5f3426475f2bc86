"""Typed shapes for the raw trip and expense rows read from the backend.

Rows are validated once at the boundary so the aggregation code can sum
fields without re-checking their presence or type.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ValidationError, field_validator

from fleetdash.errors import RecordValidationError
from fleetdash.utils.logger import get_logger
from fleetdash.utils.to_number import to_number

logger = get_logger(__name__)


class TripStatus(StrEnum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    PLANNED = "planned"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @classmethod
    def normalize(cls, value: object) -> TripStatus:
        """Map a raw status string onto the enumeration; unrecognized values become UNKNOWN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning("Unrecognized trip status %r counted as unknown", value)
            return cls.UNKNOWN


def _coerce_amount(value: object) -> float:
    number = to_number(value)
    if number is None:
        raise ValueError(f"expected a number, got {value!r}")
    return number


def _coerce_calendar_date(value: object) -> object:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value).date()
    return value


Amount = Annotated[float, BeforeValidator(_coerce_amount)]
CalendarDate = Annotated[date, BeforeValidator(_coerce_calendar_date)]


class TripStatsRow(BaseModel):
    """Trip columns needed for dashboard statistics."""

    id: str | None = None
    status: TripStatus = TripStatus.UNKNOWN
    cargo_value: Amount = 0.0
    cargo_weight: Amount = 0.0
    cargo_volume: Amount = 0.0
    created_at: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> TripStatus:
        return TripStatus.normalize(value)


class ExpenseRow(BaseModel):
    """A single trip expense line item."""

    amount: Amount = 0.0
    expense_date: CalendarDate | None = None


class TripExpenseRow(BaseModel):
    """Expense amount keyed by the trip it belongs to."""

    trip_id: str
    amount: Amount = 0.0


def parse_rows[T: BaseModel](
    model_cls: type[T],
    rows: Iterable[Mapping[str, object]] | None,
    record_type: str,
) -> list[T]:
    """Validate raw backend rows, raising RecordValidationError on the first bad row."""
    parsed: list[T] = []
    for index, row in enumerate(rows or ()):
        try:
            parsed.append(model_cls.model_validate(row))
        except ValidationError as exc:
            raise RecordValidationError(record_type, f"row {index}: {exc}") from exc
    return parsed


__all__ = [
    "ExpenseRow",
    "TripExpenseRow",
    "TripStatsRow",
    "TripStatus",
    "parse_rows",
]
