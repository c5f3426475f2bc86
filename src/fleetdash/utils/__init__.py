"""Utility helpers for fleetdash."""

from fleetdash.utils.logger import get_logger, set_level
from fleetdash.utils.now import Now
from fleetdash.utils.to_number import to_number

__all__ = ["Now", "get_logger", "set_level", "to_number"]
