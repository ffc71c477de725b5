"""Pydantic models for VectorForge tool inputs and API results.

Arguments arrive as an untyped dict; each handler narrows them through one
of the request models below via :func:`parse_arguments`, which turns pydantic
errors into a single field-naming :class:`ValidationFailure`.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modules.vf.errors import ValidationFailure

LogWorldstate = Literal["none", "minimal", "full"]

NonEmptyStr = Annotated[str, Field(min_length=1)]

M = TypeVar("M", bound=BaseModel)


# ---------------------------------------------------------------------------
# Validation error formatting
# ---------------------------------------------------------------------------


def _field_path(loc: tuple) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def describe_validation_error(exc: ValidationError) -> tuple[str, str]:
    """Return ``(field, message)`` for the first error pydantic reported."""
    error = exc.errors()[0]
    loc = tuple(error.get("loc", ()))
    field = _field_path(loc) or "arguments"
    etype = error.get("type", "")

    if etype == "missing":
        return field, f"{field} is required"
    if etype == "string_too_short":
        return field, f"{field} is required"
    if etype == "too_short":
        return field, f"{field} must contain at least one item"
    if etype == "extra_forbidden":
        return field, f"{field} is not allowed"
    return field, f"{field}: {error.get('msg', 'invalid value')}"


def parse_arguments(model: type[M], arguments: dict[str, Any]) -> M:
    """Validate ``arguments`` against ``model``.

    Raises:
        ValidationFailure: Naming the first missing or malformed field.
    """
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        field, message = describe_validation_error(e)
        raise ValidationFailure(message, field=field) from e


# ---------------------------------------------------------------------------
# Content registration
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    object_id: NonEmptyStr
    data_type: NonEmptyStr
    hash_mode: Any
    hash_version: str | None = None
    content: Any = None
    hash_b64: str | None = None
    metadata: dict[str, Any] | None = None


class VerifyRequest(BaseModel):
    divt_id: NonEmptyStr
    hash_mode: Any = None
    content: Any = None
    hash_b64: str | None = None


# ---------------------------------------------------------------------------
# Linked writes
# ---------------------------------------------------------------------------


class WorldstateRequest(BaseModel):
    kind: NonEmptyStr
    data: dict[str, Any]
    metadata: dict[str, Any] | None = None
    timestamp: str | None = None


class PromptReceiptRequest(BaseModel):
    prompt: NonEmptyStr
    response: NonEmptyStr
    model: str | None = None
    metadata: dict[str, Any] | None = None
    timestamp: str | None = None
    register_divt: bool = False


class RagSnapshotRequest(BaseModel):
    index_hash: NonEmptyStr
    snapshot_type: str = "rag-corpus"
    source_paths: list[str] = []
    doc_hashes: list[str] = []
    metadata: dict[str, Any] | None = None
    timestamp: str | None = None
    register_divt: bool = False


class AgentActionRequest(BaseModel):
    action: NonEmptyStr
    actor: NonEmptyStr
    params: dict[str, Any] | None = None
    context: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    timestamp: str | None = None
    register_divt: bool = False


class AttestationStatus(str, Enum):
    """What happened to the optional attestation of a linked write."""

    NOT_REQUESTED = "not_requested"
    ATTESTED = "attested"
    FAILED = "failed"


class RemoteRecord(BaseModel):
    """A worldstate entry as reported by the API."""

    wsl_id: NonEmptyStr
    stored: bool = True
    s3_ref: str = ""
    # "pending" or "anchored" today; other values are reported as given.
    ledger_status: str = "pending"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> RemoteRecord:
        """Build a record from an API body.

        Only a missing or empty ``wsl_id`` is an error. Null or malformed
        optional fields fall back to their defaults.

        Raises:
            ValidationError: If ``wsl_id`` is unusable.
        """
        values = {k: v for k, v in data.items() if v is not None and k in RemoteRecord.model_fields}
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            bad = {err["loc"][0] for err in e.errors() if err.get("loc")}
            if "wsl_id" in bad:
                raise
            return cls.model_validate({k: v for k, v in values.items() if k not in bad})


class LinkedWriteResult(RemoteRecord):
    attestation_status: AttestationStatus = AttestationStatus.NOT_REQUESTED
    divt_id: str | None = None
    attestation_error: str | None = None


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


class PrivacyEvidence(BaseModel):
    """Identifier/hash-only evidence. Literal text is rejected."""

    model_config = ConfigDict(extra="forbid")

    object_id: str | None = None
    divt_id: str | None = None
    hash_b64: str | None = None
    hash_mode: str | None = None
    hash_version: str | None = None
    data_type: str | None = None
    similarity: float = Field(ge=0.0, le=1.0)
    chunk_confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class FullEvidence(BaseModel):
    object_id: str | None = None
    divt_id: str | None = None
    text: str
    similarity: float = Field(ge=0.0, le=1.0)
    data_type: str | None = None


class PrivacyScoreRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    evidence: list[PrivacyEvidence] = Field(min_length=1)
    query_id: str | None = None
    answer_id: str | None = None
    model_signals: dict[str, Any] | None = None


class FullScoreRequest(BaseModel):
    query: NonEmptyStr
    answer: NonEmptyStr
    evidence: list[FullEvidence] = Field(min_length=1)
    log_worldstate: LogWorldstate = "none"


# ---------------------------------------------------------------------------
# Keys, erasure and revocation
# ---------------------------------------------------------------------------


class KeyCreateRequest(BaseModel):
    label: str | None = None
    expires_at: str | None = None


class KeyRevokeRequest(BaseModel):
    api_key_id: NonEmptyStr


class ErasureRequest(BaseModel):
    wsl_id: NonEmptyStr
    reason: str | None = None


class DivtRevokeRequest(BaseModel):
    divt_id: NonEmptyStr
    reason: str | None = None
