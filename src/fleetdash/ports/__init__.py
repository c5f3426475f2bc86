"""Port interfaces for external collaborators."""

from fleetdash.ports.logistics_backend import CountedTable, LogisticsBackend, Row

__all__ = ["CountedTable", "LogisticsBackend", "Row"]
