"""Confidence scoring requests.

Scoring itself happens in the API; this module only shapes evidence into
one of the two accepted forms and forwards it.
"""

from __future__ import annotations

from typing import Any

import structlog

from modules.vf.client import VectorForgeClient
from modules.vf.models import FullScoreRequest, PrivacyScoreRequest

logger = structlog.get_logger()


class EvidenceAggregator:
    """Forwards privacy-preserving or full-text scoring requests."""

    def __init__(self, client: VectorForgeClient):
        self.client = client

    async def score_privacy(self, req: PrivacyScoreRequest) -> dict:
        """Score using identifiers, hashes and similarities only.

        The evidence model forbids extra fields, so no literal text can
        reach the request body.
        """
        body: dict[str, Any] = {
            "evidence": [item.model_dump(exclude_none=True) for item in req.evidence],
        }
        if req.query_id is not None:
            body["query_id"] = req.query_id
        if req.answer_id is not None:
            body["answer_id"] = req.answer_id
        if req.model_signals is not None:
            body["model_signals"] = req.model_signals

        logger.info("score_privacy", evidence_count=len(req.evidence))
        return await self.client.score_privacy(body)

    async def score_full(self, req: FullScoreRequest) -> dict:
        """Score with the query, answer and full evidence text."""
        body = {
            "query": req.query,
            "answer": req.answer,
            "evidence": [item.model_dump(exclude_none=True) for item in req.evidence],
            "options": {"log_worldstate": req.log_worldstate},
        }
        logger.info(
            "score_full",
            evidence_count=len(req.evidence),
            log_worldstate=req.log_worldstate,
        )
        return await self.client.score_full(body)
