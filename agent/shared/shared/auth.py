"""Request authentication for services and outbound API calls.

Inbound: the module endpoints share a single ``SERVICE_AUTH_TOKEN``; callers
send ``Authorization: Bearer <token>``.

Outbound: every VectorForge API request carries the static ``X-Api-Key``
credential from :class:`shared.config.Settings`.

Usage in a module FastAPI app::

    from shared.auth import require_service_auth

    @app.post("/execute")
    async def execute(call: ToolCall, _=Depends(require_service_auth)):
        ...
"""

from __future__ import annotations

import structlog
from fastapi import HTTPException, Request

from shared.config import Settings, get_settings

logger = structlog.get_logger()


def vectorforge_headers(settings: Settings) -> dict[str, str]:
    """Headers sent with every VectorForge API request."""
    return {
        "X-Api-Key": settings.vf_api_key,
        "Content-Type": "application/json",
    }


async def require_service_auth(request: Request) -> None:
    """FastAPI dependency that validates the inter-service bearer token.

    Raises 401 if the token is missing or wrong. Skipped entirely when no
    token is configured.
    """
    expected = get_settings().service_auth_token
    if not expected:
        logger.warning(
            "service_auth_disabled",
            path=request.url.path,
            hint="Set SERVICE_AUTH_TOKEN in .env for production",
        )
        return

    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    if scheme != "Bearer" or not token:
        raise HTTPException(status_code=401, detail="Missing service auth token")

    if token != expected:
        logger.warning(
            "service_auth_failed",
            path=request.url.path,
            remote=request.client.host if request.client else "unknown",
        )
        raise HTTPException(status_code=401, detail="Invalid service auth token")
