"""Common schemas used across services."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness response; ``service`` names the module answering."""

    status: str = "ok"
    service: str | None = None
