"""API token enforcement for every route except the health check."""

from __future__ import annotations

import secrets

from fastapi import HTTPException, Request, status

from fleetdash.config import get_settings

OPEN_PATHS = frozenset({"/api/health"})
API_KEY_HEADER = "x-api-key"


def _supplied_token(request: Request) -> str | None:
    """Return the bearer token, falling back to the ``X-API-Key`` header."""
    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.headers.get(API_KEY_HEADER, "").strip() or None


def require_api_token(request: Request) -> None:
    """Raise HTTP 401 unless the request carries the configured API token."""
    if request.url.path in OPEN_PATHS:
        return
    services = getattr(request.app.state, "services", None)
    settings = services.settings if services is not None else get_settings()
    supplied = _supplied_token(request)
    if supplied is None or not secrets.compare_digest(
        supplied.encode(), settings.api_token.encode()
    ):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
