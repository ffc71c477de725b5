"""Test fixtures and mock data for VectorForge module tests."""

from __future__ import annotations

import json

import httpx

from shared.config import Settings

BASE_URL = "https://api.vectorforge.test"
API_KEY = "vf_test_key_0123456789"


def make_settings(**overrides) -> Settings:
    values = {"vf_api_base_url": BASE_URL, "vf_api_key": API_KEY, "service_auth_token": ""}
    values.update(overrides)
    return Settings(_env_file=None, **values)


# ---------------------------------------------------------------------------
# Canned API responses
# ---------------------------------------------------------------------------

REGISTER_RESPONSE = {
    "divt_id": "divt_01HZX3M5Q8",
    "object_id": "doc-42",
    "signatures": {
        "classical": {"alg": "ed25519", "sig_b64": "c2lnLWNsYXNzaWNhbA=="},
        "pqc": {"alg": "ml-dsa-65", "sig_b64": "c2lnLXBxYw=="},
    },
    "ledger_status": "pending",
}

VERIFY_RESPONSE = {
    "divt_id": "divt_01HZX3M5Q8",
    "valid": True,
    "hash_match": True,
    "classical_sig_ok": True,
    "pqc_sig_ok": True,
    "revoked": False,
    "ledger_status": "anchored",
}

WORLDSTATE_RESPONSE = {
    "wsl_id": "wsl_7f3a91",
    "stored": True,
    "s3_ref": "s3://vf-worldstate/tenant-1/wsl_7f3a91.json",
    "ledger_status": "pending",
}

PRIVACY_SCORE_RESPONSE = {
    "overall_confidence": 0.82,
    "semantic_confidence": 0.79,
    "integrity_score": 1.0,
    "vector_count": 2,
    "verified_count": 2,
    "explanation": "2 of 2 evidence items verified",
}

FULL_SCORE_RESPONSE = {
    **PRIVACY_SCORE_RESPONSE,
    "support_score": 0.88,
    "faithfulness_score": 0.91,
    "worldstate_ref": None,
}

KEY_CREATE_RESPONSE = {
    "api_key_id": "key_5d2c",
    "api_key": "vf_live_secretvalue",
    "key_prefix": "vf_live_se",
    "label": "ci",
    "status": "active",
    "created_at": "2026-10-01T12:00:00.000Z",
    "expires_at": None,
}

KEYS_LIST_RESPONSE = {
    "keys": [
        {
            "api_key_id": "key_5d2c",
            "key_prefix": "vf_live_se",
            "label": "ci",
            "status": "active",
            "created_at": "2026-10-01T12:00:00.000Z",
        }
    ]
}

KEY_REVOKE_RESPONSE = {
    "revoked": True,
    "api_key_id": "key_5d2c",
    "revoked_at": "2026-10-02T08:30:00.000Z",
}

ERASURE_RESPONSE = {
    "erased": True,
    "wsl_id": "wsl_7f3a91",
    "erased_at": "2026-10-03T09:00:00.000Z",
    "ledger_tx_id": "tx_99",
}

DIVT_REVOKE_RESPONSE = {
    "revoked": True,
    "divt_id": "divt_01HZX3M5Q8",
    "revoked_at": "2026-10-03T09:05:00.000Z",
}

DEFAULT_ROUTES = {
    ("POST", "/v1/divts"): (200, REGISTER_RESPONSE),
    ("POST", "/v1/divts/verify"): (200, VERIFY_RESPONSE),
    ("POST", "/v1/worldstate"): (201, WORLDSTATE_RESPONSE),
    ("POST", "/v1/score/privacy"): (200, PRIVACY_SCORE_RESPONSE),
    ("POST", "/v1/score/full"): (200, FULL_SCORE_RESPONSE),
    ("POST", "/v1/keys"): (201, KEY_CREATE_RESPONSE),
    ("GET", "/v1/keys"): (200, KEYS_LIST_RESPONSE),
    ("POST", "/v1/keys/key_5d2c/revoke"): (200, KEY_REVOKE_RESPONSE),
    ("DELETE", "/v1/worldstate/wsl_7f3a91"): (200, ERASURE_RESPONSE),
    ("POST", "/v1/divts/divt_01HZX3M5Q8/revoke"): (200, DIVT_REVOKE_RESPONSE),
}


class FakeVectorForgeAPI:
    """In-process stand-in for the REST API, served through ``httpx.MockTransport``.

    Unrouted requests get the API's 404 body. Every request is recorded.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = dict(DEFAULT_ROUTES if routes is None else routes)
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def route(self, method: str, path: str, status: int = 200, body=None) -> None:
        self.routes[(method, path)] = (status, body)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"error": "not_found", "message": "Resource not found"})
        status, body = self.routes[key]
        if isinstance(body, Exception):
            raise body
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def last_body(self, method: str, path: str) -> dict:
        return json.loads(self.calls(method, path)[-1].content)
