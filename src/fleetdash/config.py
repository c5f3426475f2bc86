"""Load settings with environment overrides."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from fleetdash.define_settings__config import Settings


def get_settings(**overrides: object) -> Settings:
    """Return a Settings instance built from the current environment.

    The settings module reads environment variables at import time, so it is
    reloaded after ``load_dotenv`` to pick up changes made since the last call.
    Keyword overrides are applied to top-level fields.
    """
    load_dotenv()
    settings_module = importlib.reload(
        importlib.import_module("fleetdash.define_settings__config")
    )
    settings = settings_module.Settings()
    for name, value in overrides.items():
        if not hasattr(settings, name):
            raise TypeError(f"get_settings() got an unexpected keyword argument '{name}'")
        setattr(settings, name, value)
    return settings


__all__ = ["get_settings"]
