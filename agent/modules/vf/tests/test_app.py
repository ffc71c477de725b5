"""Tests for VectorForge module FastAPI endpoints."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from modules.vf.main import app
from modules.vf.tests.fixtures import make_settings


@pytest.fixture
async def client():
    """Create an async test client for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def no_service_auth():
    with patch("shared.auth.get_settings", return_value=make_settings(service_auth_token="")):
        yield


@pytest.fixture
def service_auth():
    with patch("shared.auth.get_settings", return_value=make_settings(service_auth_token="s3cret")):
        yield


# ---------------------------------------------------------------------------
# Health / manifest
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "vf"}


@pytest.mark.asyncio
async def test_manifest(client, no_service_auth):
    resp = await client.get("/manifest")
    assert resp.status_code == 200
    data = resp.json()
    assert data["module_name"] == "vf"
    tool_names = [t["name"] for t in data["tools"]]
    assert "vf.register" in tool_names
    assert "vf.keys.revoke" in tool_names
    assert len(tool_names) == 13


# ---------------------------------------------------------------------------
# Service auth
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_manifest_requires_token(client, service_auth):
    resp = await client.get("/manifest")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Missing service auth token"


@pytest.mark.asyncio
async def test_manifest_rejects_wrong_token(client, service_auth):
    resp = await client.get("/manifest", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid service auth token"


@pytest.mark.asyncio
async def test_manifest_accepts_token(client, service_auth):
    resp = await client.get("/manifest", headers={"Authorization": "Bearer s3cret"})
    assert resp.status_code == 200


# ---------------------------------------------------------------------------
# Execute
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_execute_not_ready(client, no_service_auth):
    with patch("modules.vf.main.registry", None):
        resp = await client.post("/execute", json={"tool_name": "vf.keys.list", "arguments": {}})
    assert resp.json() == {
        "tool_name": "vf.keys.list",
        "success": False,
        "result": None,
        "error": "Module not ready",
    }


@pytest.mark.asyncio
async def test_execute_success(client, no_service_auth, registry):
    with patch("modules.vf.main.registry", registry):
        resp = await client.post(
            "/execute",
            json={
                "tool_name": "vf.prompt_receipt.create",
                "arguments": {"prompt": "hi", "response": "hello", "also_register_divt": True},
            },
        )

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["error"] is None
    assert data["result"]["wsl_id"] == "wsl_7f3a91"
    assert data["result"]["divt_id"] == "divt_01HZX3M5Q8"


@pytest.mark.asyncio
async def test_execute_unknown_tool(client, no_service_auth, registry):
    with patch("modules.vf.main.registry", registry):
        resp = await client.post("/execute", json={"tool_name": "vf.bogus", "arguments": {}})

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is False
    assert data["error"] == "Unknown tool: vf.bogus"


@pytest.mark.asyncio
async def test_execute_validation_error(client, no_service_auth, registry, api):
    with patch("modules.vf.main.registry", registry):
        resp = await client.post(
            "/execute", json={"tool_name": "vf.score.full", "arguments": {"evidence": []}}
        )

    data = resp.json()
    assert data["success"] is False
    assert "query" in data["error"]
    assert api.requests == []


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------


def test_missing_credentials_fail_startup():
    settings = make_settings(vf_api_base_url="", vf_api_key="")
    with pytest.raises(RuntimeError, match="VF_API_BASE_URL and VF_API_KEY"):
        settings.require_vectorforge()
