"""VectorForge trust API client."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from modules.vf.errors import NotFoundError, RemoteError
from shared.auth import vectorforge_headers
from shared.config import Settings

logger = structlog.get_logger()


def _segment(value: str) -> str:
    """Quote an identifier for use as a single URL path segment."""
    return quote(value, safe="")


def _compact(body: dict) -> dict:
    """Drop unset optional fields from a request body."""
    return {k: v for k, v in body.items() if v is not None}


def _remote_message(resp: httpx.Response) -> str:
    """Prefer the API's own error text over the HTTP reason phrase."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return resp.reason_phrase or f"HTTP {resp.status_code}"


class VectorForgeClient:
    """Async client for the VectorForge REST API.

    Each call opens its own ``httpx.AsyncClient``: there is no pooling,
    caching or retry. Non-success responses raise :class:`RemoteError`
    (:class:`NotFoundError` for 404).
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self._transport = transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        label: str,
        method: str,
        path: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
    ) -> dict[str, Any]:
        """Make one API request and return the parsed JSON object."""
        try:
            async with httpx.AsyncClient(
                base_url=self.settings.vf_api_base_url,
                headers=vectorforge_headers(self.settings),
                timeout=self.settings.vf_api_timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            logger.error("vf_api_request_error", api=label, path=path, error=str(e))
            raise RemoteError(label, None, f"failed to reach VectorForge API: {e}") from e

        if not resp.is_success:
            logger.error(
                "vf_api_http_error",
                api=label,
                path=path,
                status=resp.status_code,
                body=resp.text[:500],
            )
            error_cls = NotFoundError if resp.status_code == 404 else RemoteError
            raise error_cls(label, resp.status_code, _remote_message(resp))

        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteError(label, resp.status_code, "response body is not valid JSON") from e
        if not isinstance(data, dict):
            raise RemoteError(label, resp.status_code, "response body is not a JSON object")
        return data

    # ------------------------------------------------------------------
    # DIVTs
    # ------------------------------------------------------------------

    async def register_divt(self, body: dict) -> dict:
        return await self._request("DIVT", "POST", "/v1/divts", json=body)

    async def verify_divt(self, body: dict) -> dict:
        return await self._request("DIVT", "POST", "/v1/divts/verify", json=body)

    async def revoke_divt(self, divt_id: str, reason: str | None = None) -> dict:
        return await self._request(
            "Revocation",
            "POST",
            f"/v1/divts/{_segment(divt_id)}/revoke",
            json=_compact({"reason": reason}),
        )

    # ------------------------------------------------------------------
    # Worldstate
    # ------------------------------------------------------------------

    async def create_worldstate(self, payload: dict) -> dict:
        return await self._request("Worldstate", "POST", "/v1/worldstate", json=payload)

    async def erase_worldstate(self, wsl_id: str, reason: str | None = None) -> dict:
        params = {"reason": reason} if reason else None
        return await self._request(
            "Erasure",
            "DELETE",
            f"/v1/worldstate/{_segment(wsl_id)}",
            params=params,
        )

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    async def score_privacy(self, body: dict) -> dict:
        return await self._request("Score Privacy", "POST", "/v1/score/privacy", json=body)

    async def score_full(self, body: dict) -> dict:
        return await self._request("Score Full", "POST", "/v1/score/full", json=body)

    # ------------------------------------------------------------------
    # API keys
    # ------------------------------------------------------------------

    async def create_key(self, label: str | None = None, expires_at: str | None = None) -> dict:
        return await self._request(
            "Keys", "POST", "/v1/keys", json=_compact({"label": label, "expires_at": expires_at})
        )

    async def list_keys(self) -> dict:
        return await self._request("Keys", "GET", "/v1/keys")

    async def revoke_key(self, api_key_id: str) -> dict:
        return await self._request("Keys", "POST", f"/v1/keys/{_segment(api_key_id)}/revoke")
