"""Hash-mode dispatch for DIVT registration and verification.

Each :class:`HashMode` has exactly one canonicalisation strategy in
``STRATEGIES``. Content type checks happen while hashing, before any API
request is built, so a bad payload never produces a partial remote write.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from modules.vf import canon
from modules.vf.client import VectorForgeClient
from modules.vf.errors import UnknownModeError, ValidationFailure

logger = structlog.get_logger()


class HashMode(str, Enum):
    CONTENT = "content"
    JSON = "json"
    EMBEDDING = "embedding"
    IMAGE = "image"
    CUSTOM = "custom"


def parse_mode(value: Any, field: str = "hash_mode") -> HashMode:
    """Convert a raw mode value into a :class:`HashMode`.

    Raises:
        UnknownModeError: For anything outside the enumeration.
    """
    try:
        return HashMode(value)
    except (ValueError, TypeError):
        raise UnknownModeError(value, field=field) from None


@dataclass(frozen=True)
class CanonicalHash:
    hash_b64: str
    hash_version: str


Strategy = Callable[[Any, str | None, str | None], CanonicalHash]


def _require_content(content: Any, mode: HashMode) -> None:
    if content is None:
        raise ValidationFailure(f"content is required for {mode.value} mode", field="content")


def _content_strategy(content: Any, hash_b64: str | None, hash_version: str | None) -> CanonicalHash:
    _require_content(content, HashMode.CONTENT)
    if not isinstance(content, str):
        raise ValidationFailure("content must be a string for content mode", field="content")
    return CanonicalHash(canon.hash_content_v1(content), canon.CONTENT_V1)


def _json_strategy(content: Any, hash_b64: str | None, hash_version: str | None) -> CanonicalHash:
    _require_content(content, HashMode.JSON)
    if not isinstance(content, (dict, list)):
        raise ValidationFailure("content must be an object or array for json mode", field="content")
    try:
        digest = canon.hash_json_v1(content)
    except ValueError as e:
        raise ValidationFailure(f"content {e}", field="content") from e
    return CanonicalHash(digest, canon.JSON_CANON_V1)


def _embedding_strategy(content: Any, hash_b64: str | None, hash_version: str | None) -> CanonicalHash:
    _require_content(content, HashMode.EMBEDDING)
    if not isinstance(content, (list, tuple)):
        raise ValidationFailure("content must be an array of numbers for embedding mode", field="content")
    try:
        digest = canon.hash_embedding_v1(list(content))
    except ValueError as e:
        raise ValidationFailure(f"content {e}", field="content") from e
    return CanonicalHash(digest, canon.EMBEDDING_V1)


def _image_strategy(content: Any, hash_b64: str | None, hash_version: str | None) -> CanonicalHash:
    _require_content(content, HashMode.IMAGE)
    if not isinstance(content, str):
        raise ValidationFailure("content must be a base64 string for image mode", field="content")
    try:
        image = canon.decode_image(content)
    except ValueError as e:
        raise ValidationFailure(f"content {e}", field="content") from e
    return CanonicalHash(canon.hash_image_v1(image), canon.IMAGE_V1)


def _custom_strategy(content: Any, hash_b64: str | None, hash_version: str | None) -> CanonicalHash:
    if not hash_b64:
        raise ValidationFailure("hash_b64 is required for custom mode", field="hash_b64")
    return CanonicalHash(hash_b64, hash_version or canon.CUSTOM_V1)


STRATEGIES: dict[HashMode, Strategy] = {
    HashMode.CONTENT: _content_strategy,
    HashMode.JSON: _json_strategy,
    HashMode.EMBEDDING: _embedding_strategy,
    HashMode.IMAGE: _image_strategy,
    HashMode.CUSTOM: _custom_strategy,
}


def canonical_hash(
    mode: HashMode,
    content: Any = None,
    *,
    hash_b64: str | None = None,
    hash_version: str | None = None,
) -> CanonicalHash:
    """Compute (or, for custom mode, accept) the hash registered for ``content``."""
    digest = STRATEGIES[mode](content, hash_b64, hash_version)
    if hash_version and hash_version != digest.hash_version:
        raise ValidationFailure(
            f"hash_version {hash_version!r} does not match {mode.value} mode "
            f"(expected {digest.hash_version!r})",
            field="hash_version",
        )
    return digest


class ModeDispatcher:
    """Registers and verifies DIVTs through the strategy for each hash mode."""

    def __init__(self, client: VectorForgeClient):
        self.client = client

    async def register(
        self,
        object_id: str,
        data_type: str,
        mode: HashMode,
        content: Any = None,
        hash_b64: str | None = None,
        hash_version: str | None = None,
        metadata: dict | None = None,
    ) -> dict:
        """Canonicalise ``content`` for ``mode`` and issue a DIVT for it."""
        digest = canonical_hash(mode, content, hash_b64=hash_b64, hash_version=hash_version)

        body: dict[str, Any] = {
            "object_id": object_id,
            "hash_mode": mode.value,
            "hash_version": digest.hash_version,
            "hash_b64": digest.hash_b64,
            "data_type": data_type,
        }
        if metadata is not None:
            body["metadata"] = metadata

        logger.info("vf_register", object_id=object_id, hash_mode=mode.value, data_type=data_type)
        result = await self.client.register_divt(body)
        result.setdefault("hash_b64", digest.hash_b64)
        return result

    async def register_json(
        self, object_id: str, data: dict | list, data_type: str, metadata: dict | None = None
    ) -> dict:
        return await self.register(object_id, data_type, HashMode.JSON, content=data, metadata=metadata)

    async def verify(
        self,
        divt_id: str,
        mode: HashMode | None = None,
        content: Any = None,
        hash_b64: str | None = None,
    ) -> dict:
        """Verify a DIVT, optionally against content.

        A supplied ``hash_b64`` is sent as-is. Otherwise content plus a mode
        is re-hashed locally with the registration strategy. With neither,
        only existence, revocation and signatures are checked.
        """
        body: dict[str, Any] = {"divt_id": divt_id}
        if hash_b64:
            body["hash_b64"] = hash_b64
        elif content is not None and mode is not None:
            body["hash_b64"] = canonical_hash(mode, content).hash_b64

        logger.info("vf_verify", divt_id=divt_id, with_hash="hash_b64" in body)
        return await self.client.verify_divt(body)
