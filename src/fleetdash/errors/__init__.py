"""Custom error types used in fleetdash."""

from __future__ import annotations


class FleetdashError(Exception):
    """Base class for fleetdash errors."""


class FetchError(FleetdashError):
    """A read against the logistics backend failed."""

    def __init__(self, message: str, *, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource


class FetchTimeoutError(FetchError):
    """A backend read did not complete before its deadline."""

    def __init__(self, resource: str, timeout_s: float) -> None:
        super().__init__(
            f"Timed out after {timeout_s:g}s fetching {resource}",
            resource=resource,
        )
        self.timeout_s = timeout_s


class NotAuthenticatedError(FleetdashError):
    """No authenticated principal is available to scope backend reads."""

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)


class RecordValidationError(FleetdashError, ValueError):
    """A backend row did not match the expected record shape."""

    def __init__(self, record_type: str, detail: str) -> None:
        super().__init__(f"Invalid {record_type} record: {detail}")
        self.record_type = record_type


__all__ = [
    "FetchError",
    "FetchTimeoutError",
    "FleetdashError",
    "NotAuthenticatedError",
    "RecordValidationError",
]
