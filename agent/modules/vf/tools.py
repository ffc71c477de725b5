"""VectorForge module tool implementations.

Every method takes the already-normalised argument dict for one call,
narrows it through a request model, and returns a JSON-serialisable dict.
Failures are raised as :mod:`modules.vf.errors` types and mapped to an
error envelope by the registry.
"""

from __future__ import annotations

import structlog

from modules.vf.client import VectorForgeClient
from modules.vf.ledger import (
    LinkedWriteOrchestrator,
    build_agent_action,
    build_prompt_receipt,
    build_rag_snapshot,
    build_worldstate_event,
    utc_now_iso,
)
from modules.vf.models import (
    AgentActionRequest,
    DivtRevokeRequest,
    ErasureRequest,
    FullScoreRequest,
    KeyCreateRequest,
    KeyRevokeRequest,
    PrivacyScoreRequest,
    PromptReceiptRequest,
    RagSnapshotRequest,
    RegisterRequest,
    VerifyRequest,
    WorldstateRequest,
    parse_arguments,
)
from modules.vf.modes import ModeDispatcher, parse_mode
from modules.vf.scoring import EvidenceAggregator

logger = structlog.get_logger()


class VFTools:
    """Tool implementations for the VectorForge trust API."""

    def __init__(self, client: VectorForgeClient):
        self.client = client
        self.dispatcher = ModeDispatcher(client)
        self.ledger = LinkedWriteOrchestrator(client, self.dispatcher)
        self.scoring = EvidenceAggregator(client)

    # ------------------------------------------------------------------
    # DIVT registry
    # ------------------------------------------------------------------

    async def register(self, arguments: dict) -> dict:
        """Canonicalise content for its hash mode and issue a DIVT."""
        req = parse_arguments(RegisterRequest, arguments)
        mode = parse_mode(req.hash_mode)
        return await self.dispatcher.register(
            req.object_id,
            req.data_type,
            mode,
            content=req.content,
            hash_b64=req.hash_b64,
            hash_version=req.hash_version,
            metadata=req.metadata,
        )

    async def verify(self, arguments: dict) -> dict:
        """Verify a DIVT, optionally re-checking content against its hash."""
        req = parse_arguments(VerifyRequest, arguments)
        mode = parse_mode(req.hash_mode) if req.hash_mode is not None else None
        return await self.dispatcher.verify(
            req.divt_id, mode=mode, content=req.content, hash_b64=req.hash_b64
        )

    # ------------------------------------------------------------------
    # Worldstate writes
    # ------------------------------------------------------------------

    async def worldstate_create(self, arguments: dict) -> dict:
        """Write a generic event to the worldstate ledger."""
        req = parse_arguments(WorldstateRequest, arguments)
        result = await self.ledger.write(build_worldstate_event(req))
        return result.model_dump(
            mode="json", include={"wsl_id", "stored", "s3_ref", "ledger_status"}
        )

    async def prompt_receipt_create(self, arguments: dict) -> dict:
        """Log a prompt/response receipt, optionally attested by a DIVT."""
        req = parse_arguments(PromptReceiptRequest, arguments)
        result = await self.ledger.write(build_prompt_receipt(req), attest=req.register_divt)
        return result.model_dump(mode="json", exclude_none=True)

    async def rag_snapshot_create(self, arguments: dict) -> dict:
        """Record a RAG index snapshot, optionally attested by a DIVT."""
        req = parse_arguments(RagSnapshotRequest, arguments)
        result = await self.ledger.write(build_rag_snapshot(req), attest=req.register_divt)
        return result.model_dump(mode="json", exclude_none=True)

    async def agent_action_log(self, arguments: dict) -> dict:
        """Log an agent action, optionally attested by a DIVT."""
        req = parse_arguments(AgentActionRequest, arguments)
        result = await self.ledger.write(build_agent_action(req), attest=req.register_divt)
        return result.model_dump(mode="json", exclude_none=True)

    # ------------------------------------------------------------------
    # Confidence scoring
    # ------------------------------------------------------------------

    async def score_privacy(self, arguments: dict) -> dict:
        """Score confidence from evidence identifiers and hashes only."""
        req = parse_arguments(PrivacyScoreRequest, arguments)
        return await self.scoring.score_privacy(req)

    async def score_full(self, arguments: dict) -> dict:
        """Score confidence, support and faithfulness from full evidence text."""
        req = parse_arguments(FullScoreRequest, arguments)
        return await self.scoring.score_full(req)

    # ------------------------------------------------------------------
    # API keys
    # ------------------------------------------------------------------

    async def keys_create(self, arguments: dict) -> dict:
        """Create an API key. The secret is only returned once."""
        req = parse_arguments(KeyCreateRequest, arguments)
        logger.info("key_create", label=req.label)
        return await self.client.create_key(label=req.label, expires_at=req.expires_at)

    async def keys_list(self, arguments: dict) -> dict:
        """List API keys for the tenant."""
        result = await self.client.list_keys()
        result.setdefault("keys", [])
        return result

    async def keys_revoke(self, arguments: dict) -> dict:
        """Revoke an API key."""
        req = parse_arguments(KeyRevokeRequest, arguments)
        logger.info("key_revoke", api_key_id=req.api_key_id)
        return await self.client.revoke_key(req.api_key_id)

    # ------------------------------------------------------------------
    # Erasure and revocation
    # ------------------------------------------------------------------

    async def erasure_request(self, arguments: dict) -> dict:
        """Erase a worldstate entry's payload and confirm it."""
        req = parse_arguments(ErasureRequest, arguments)
        logger.info("erasure_request", wsl_id=req.wsl_id)
        api_result = await self.client.erase_worldstate(req.wsl_id, reason=req.reason)
        result = {
            "erased": True if api_result.get("erased") is None else api_result["erased"],
            "wsl_id": api_result.get("wsl_id") or req.wsl_id,
            "erased_at": api_result.get("erased_at") or utc_now_iso(),
        }
        if api_result.get("ledger_tx_id"):
            result["ledger_tx_id"] = api_result["ledger_tx_id"]
        return result

    async def divt_revoke(self, arguments: dict) -> dict:
        """Revoke a DIVT and confirm it."""
        req = parse_arguments(DivtRevokeRequest, arguments)
        logger.info("divt_revoke", divt_id=req.divt_id)
        api_result = await self.client.revoke_divt(req.divt_id, reason=req.reason)
        result = {
            "revoked": True if api_result.get("revoked") is None else api_result["revoked"],
            "divt_id": api_result.get("divt_id") or req.divt_id,
            "revoked_at": api_result.get("revoked_at") or utc_now_iso(),
        }
        if api_result.get("ledger_tx_id"):
            result["ledger_tx_id"] = api_result["ledger_tx_id"]
        return result
