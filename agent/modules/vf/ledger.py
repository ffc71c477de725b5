"""Linked worldstate writes with optional DIVT attestation.

Receipts, RAG snapshots, agent actions and generic events all follow the
same two steps: create a worldstate entry, then (if asked) register a DIVT
over the same payload under the subject ``{kind}:{wsl_id}``. The DIVT is
only attempted after the worldstate write has succeeded, and its failure
never undoes or fails the worldstate write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError

from modules.vf.client import VectorForgeClient
from modules.vf.errors import GatewayError, RemoteError
from modules.vf.models import (
    AgentActionRequest,
    AttestationStatus,
    LinkedWriteResult,
    PromptReceiptRequest,
    RagSnapshotRequest,
    RemoteRecord,
    WorldstateRequest,
)
from modules.vf.modes import ModeDispatcher

logger = structlog.get_logger()

JSON_CANON = {"type": "json", "v": "1"}


def utc_now_iso() -> str:
    """Current time as ISO-8601 UTC with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class LinkedWrite:
    """One worldstate entry plus what its optional DIVT should look like."""

    kind: str
    data: dict[str, Any]
    timestamp: str
    metadata: dict[str, Any] = field(default_factory=dict)
    data_type: str | None = None
    attestation_metadata: dict[str, Any] | None = None

    def worldstate_payload(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "canon": JSON_CANON,
            "timestamp": self.timestamp,
            "data": self.data,
            "metadata": self.metadata,
        }

    def subject_id(self, wsl_id: str) -> str:
        return f"{self.kind}:{wsl_id}"


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


def build_worldstate_event(req: WorldstateRequest) -> LinkedWrite:
    return LinkedWrite(
        kind=req.kind,
        data=req.data,
        timestamp=req.timestamp or utc_now_iso(),
        metadata=req.metadata or {},
    )


def build_prompt_receipt(req: PromptReceiptRequest) -> LinkedWrite:
    timestamp = req.timestamp or utc_now_iso()
    return LinkedWrite(
        kind="prompt_receipt",
        data={
            "type": "prompt_receipt_v1",
            "prompt": req.prompt,
            "response": req.response,
            "model": req.model or "unknown",
            "metadata": req.metadata or {},
            "timestamp": timestamp,
        },
        timestamp=timestamp,
        metadata={
            "tags": ["prompt_receipt"],
            "source_type": "ai_generated",
            "lsm_ingest_ok": True,
        },
        data_type="prompt_receipt_v1",
        attestation_metadata=req.metadata,
    )


def build_rag_snapshot(req: RagSnapshotRequest) -> LinkedWrite:
    return LinkedWrite(
        kind="rag_snapshot",
        data={
            "snapshot_type": req.snapshot_type,
            "source_paths": req.source_paths,
            "doc_hashes": req.doc_hashes,
            "index_hash": req.index_hash,
            "metadata": req.metadata or {},
        },
        timestamp=req.timestamp or utc_now_iso(),
        metadata={
            "tags": ["rag", "snapshot"],
            "source_type": "rag_system",
            "lsm_ingest_ok": True,
        },
        data_type="rag_snapshot_v1",
        attestation_metadata=req.metadata,
    )


def build_agent_action(req: AgentActionRequest) -> LinkedWrite:
    return LinkedWrite(
        kind="agent_action",
        data={
            "action": req.action,
            "actor": req.actor,
            "params": req.params or {},
            "context": req.context or {},
        },
        timestamp=req.timestamp or utc_now_iso(),
        metadata={
            "tags": ["agent", req.action],
            "source_type": "automation",
            **(req.metadata or {}),
        },
        data_type="agent_action_v1",
        attestation_metadata=req.metadata,
    )


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


class LinkedWriteOrchestrator:
    """Creates worldstate entries and, on request, attests them."""

    def __init__(self, client: VectorForgeClient, dispatcher: ModeDispatcher):
        self.client = client
        self.dispatcher = dispatcher

    async def write(self, record: LinkedWrite, attest: bool = False) -> LinkedWriteResult:
        """Create the worldstate entry, then optionally register its DIVT.

        Raises:
            RemoteError: If the worldstate write fails. Attestation failures
                are reported through ``attestation_status`` instead.
        """
        raw = await self.client.create_worldstate(record.worldstate_payload())
        try:
            primary = RemoteRecord.from_api(raw)
        except ValidationError as e:
            raise RemoteError("Worldstate", None, f"unexpected response: {raw!r}") from e

        logger.info(
            "worldstate_created",
            kind=record.kind,
            wsl_id=primary.wsl_id,
            ledger_status=primary.ledger_status,
        )
        result = LinkedWriteResult(**primary.model_dump())

        if not attest:
            return result
        if record.data_type is None:
            raise ValueError(f"record kind {record.kind!r} cannot be attested")

        subject = record.subject_id(primary.wsl_id)
        try:
            divt = await self.dispatcher.register_json(
                subject, record.data, record.data_type, record.attestation_metadata
            )
            divt_id = divt.get("divt_id")
            if not isinstance(divt_id, str) or not divt_id:
                raise RemoteError("DIVT", None, "response did not include a divt_id")
        except GatewayError as e:
            logger.warning("attestation_failed", subject=subject, error=e.message)
            return result.model_copy(
                update={
                    "attestation_status": AttestationStatus.FAILED,
                    "attestation_error": e.message,
                }
            )

        logger.info("attestation_created", subject=subject, divt_id=divt_id)
        return result.model_copy(
            update={"attestation_status": AttestationStatus.ATTESTED, "divt_id": divt_id}
        )
