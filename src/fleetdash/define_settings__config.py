"""Define top-level application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default))


def _env_int(name: str, default: str) -> int:
    return int(os.getenv(name, default))


@dataclass(slots=True)
class SupabaseSettings:
    """Connection details for the hosted logistics backend."""

    url: str = os.getenv("SUPABASE_URL", "http://localhost:54321").rstrip("/")
    key: str = os.getenv("SUPABASE_KEY", os.getenv("SUPABASE_ANON_KEY", ""))
    email: str | None = os.getenv("SUPABASE_EMAIL")
    password: str | None = os.getenv("SUPABASE_PASSWORD")

    @property
    def rest_url(self) -> str:
        return f"{self.url}/rest/v1/"


@dataclass(slots=True)
class CacheSettings:
    """TTLs (seconds) and bounds for the read-through cache."""

    max_entries: int = _env_int("FLEETDASH_CACHE_MAX_ENTRIES", "256")
    default_ttl_s: float = _env_float("FLEETDASH_CACHE_DEFAULT_TTL_S", "300")
    dashboard_ttl_s: float = _env_float("FLEETDASH_DASHBOARD_TTL_S", "180")
    expenses_batch_ttl_s: float = _env_float("FLEETDASH_EXPENSES_BATCH_TTL_S", "180")
    trips_page_ttl_s: float = _env_float("FLEETDASH_TRIPS_PAGE_TTL_S", "120")
    sweep_interval_s: float = _env_float("FLEETDASH_CACHE_SWEEP_INTERVAL_S", "60")


@dataclass(slots=True)
class RetrySettings:
    """Retry policy for the connection optimizer."""

    attempts: int = _env_int("FLEETDASH_RETRY_ATTEMPTS", "3")
    base_delay_s: float = _env_float("FLEETDASH_RETRY_BASE_DELAY_S", "1")
    max_delay_s: float = _env_float("FLEETDASH_RETRY_MAX_DELAY_S", "5")


@dataclass(slots=True)
class Settings:
    """Central configuration for backend access, caching, and the API."""

    api_token: str = os.getenv("FLEETDASH_API_TOKEN", "local-dev-token")
    timezone: str = os.getenv("FLEETDASH_TIMEZONE", "Europe/Moscow")
    fetch_timeout_s: float = _env_float("FLEETDASH_FETCH_TIMEOUT_S", "15")
    connection_probe_timeout_s: float = _env_float("FLEETDASH_PROBE_TIMEOUT_S", "5")
    api_host: str = os.getenv("FLEETDASH_API_HOST", "127.0.0.1")
    api_port: int = _env_int("FLEETDASH_API_PORT", "8000")
    log_level: str = os.getenv("FLEETDASH_LOG_LEVEL", "INFO").upper()

    supabase: SupabaseSettings = field(default_factory=SupabaseSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    retry: RetrySettings = field(default_factory=RetrySettings)

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)
