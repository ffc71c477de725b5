"""VectorForge module manifest — tool definitions."""

from shared.schemas.tools import ModuleManifest, ToolDefinition, ToolParameter

HASH_MODES = ["content", "json", "embedding", "image", "custom"]
LEGACY_MODES = ["text", "json", "embedding", "image", "hash"]

_METADATA = ToolParameter(
    name="metadata",
    type="object",
    description="Optional caller metadata stored alongside the record",
    required=False,
)
_TIMESTAMP = ToolParameter(
    name="timestamp",
    type="string",
    description="ISO-8601 event time. Default: now (UTC)",
    required=False,
)
_REGISTER_DIVT = ToolParameter(
    name="register_divt",
    type="boolean",
    description="Also register a DIVT over the stored payload. Default: false",
    required=False,
    default=False,
)
_ALSO_REGISTER_DIVT = ToolParameter(
    name="also_register_divt",
    type="boolean",
    description="Deprecated alias of register_divt",
    required=False,
)
_HASH_MODE_DESCRIPTION = (
    "How content is canonicalised before hashing: 'content' (UTF-8 text), "
    "'json' (object or array), 'embedding' (array of numbers), 'image' (base64 bytes) "
    "or 'custom' (caller-supplied hash_b64)"
)

_PRIVACY_EVIDENCE_ITEM = {
    "type": "object",
    "properties": {
        "object_id": {"type": "string"},
        "divt_id": {"type": "string"},
        "hash_b64": {"type": "string"},
        "hash_mode": {"type": "string"},
        "hash_version": {"type": "string"},
        "data_type": {"type": "string"},
        "similarity": {"type": "number", "minimum": 0, "maximum": 1},
        "chunk_confidence": {"type": "number", "minimum": 0, "maximum": 1},
    },
    "required": ["similarity"],
    "additionalProperties": False,
}

_FULL_EVIDENCE_ITEM = {
    "type": "object",
    "properties": {
        "object_id": {"type": "string"},
        "divt_id": {"type": "string"},
        "text": {"type": "string"},
        "similarity": {"type": "number", "minimum": 0, "maximum": 1},
        "data_type": {"type": "string"},
    },
    "required": ["text", "similarity"],
}

MANIFEST = ModuleManifest(
    module_name="vf",
    description=(
        "VectorForge trust layer: register and verify DIVTs, log prompt receipts, "
        "RAG snapshots and agent actions to the worldstate ledger, score answer "
        "confidence, and manage API keys, erasure and revocation."
    ),
    tools=[
        ToolDefinition(
            name="vf.register",
            description=(
                "Register content and issue a DIVT (data integrity verification token). "
                "Content is canonicalised and hashed according to hash_mode."
            ),
            parameters=[
                ToolParameter(
                    name="object_id",
                    type="string",
                    description="Caller's identifier for the registered object",
                ),
                ToolParameter(
                    name="data_type",
                    type="string",
                    description="Data type label, e.g. 'document_chunk_v1'",
                ),
                ToolParameter(
                    name="hash_mode",
                    type="string",
                    description=_HASH_MODE_DESCRIPTION,
                    enum=HASH_MODES,
                ),
                ToolParameter(
                    name="mode",
                    type="string",
                    description="Deprecated alias of hash_mode",
                    required=False,
                    enum=LEGACY_MODES,
                ),
                ToolParameter(
                    name="content",
                    type="any",
                    description="Content to hash: string, object, number array or base64 image",
                    required=False,
                ),
                ToolParameter(
                    name="hash_b64",
                    type="string",
                    description="Precomputed base64 hash (required for 'custom' mode)",
                    required=False,
                ),
                ToolParameter(
                    name="hash_version",
                    type="string",
                    description="Hash version label. Default depends on hash_mode",
                    required=False,
                ),
                _METADATA,
            ],
            required_permission="user",
        ),
        ToolDefinition(
            name="vf.verify",
            description=(
                "Verify a DIVT: signatures, revocation status and, if content or "
                "hash_b64 is given, whether the content still matches."
            ),
            parameters=[
                ToolParameter(name="divt_id", type="string", description="DIVT to verify"),
                ToolParameter(
                    name="hash_mode",
                    type="string",
                    description=_HASH_MODE_DESCRIPTION,
                    required=False,
                    enum=HASH_MODES,
                ),
                ToolParameter(
                    name="mode",
                    type="string",
                    description="Deprecated alias of hash_mode",
                    required=False,
                    enum=LEGACY_MODES,
                ),
                ToolParameter(
                    name="content",
                    type="any",
                    description="Content to re-hash and compare",
                    required=False,
                ),
                ToolParameter(
                    name="hash_b64",
                    type="string",
                    description="Precomputed base64 hash to compare",
                    required=False,
                ),
            ],
            required_permission="guest",
        ),
        ToolDefinition(
            name="vf.prompt_receipt.create",
            description=(
                "Log a prompt/response pair to the worldstate ledger as a receipt, "
                "optionally attesting it with a DIVT."
            ),
            parameters=[
                ToolParameter(name="prompt", type="string", description="Prompt sent to the model"),
                ToolParameter(name="response", type="string", description="Model response"),
                ToolParameter(
                    name="model",
                    type="string",
                    description="Model name. Default: 'unknown'",
                    required=False,
                ),
                _METADATA,
                _TIMESTAMP,
                _REGISTER_DIVT,
                _ALSO_REGISTER_DIVT,
            ],
            required_permission="user",
        ),
        ToolDefinition(
            name="vf.rag_snapshot.create",
            description=(
                "Record the state of a RAG corpus/index to the worldstate ledger, "
                "optionally attesting it with a DIVT."
            ),
            parameters=[
                ToolParameter(name="index_hash", type="string", description="Hash of the index"),
                ToolParameter(
                    name="snapshot_type",
                    type="string",
                    description="Snapshot type. Default: 'rag-corpus'",
                    required=False,
                    default="rag-corpus",
                ),
                ToolParameter(
                    name="doc_hashes",
                    type="array",
                    description="Hashes of the documents in the index",
                    required=False,
                    items={"type": "string"},
                ),
                ToolParameter(
                    name="source_paths",
                    type="array",
                    description="Source paths the index was built from",
                    required=False,
                    items={"type": "string"},
                ),
                _METADATA,
                _TIMESTAMP,
                _REGISTER_DIVT,
                _ALSO_REGISTER_DIVT,
            ],
            required_permission="user",
        ),
        ToolDefinition(
            name="vf.agent_action.log",
            description=(
                "Log an action taken by an agent to the worldstate ledger, "
                "optionally attesting it with a DIVT."
            ),
            parameters=[
                ToolParameter(name="action", type="string", description="Action name"),
                ToolParameter(name="actor", type="string", description="Agent or user performing it"),
                ToolParameter(
                    name="params",
                    type="object",
                    description="Action parameters",
                    required=False,
                ),
                ToolParameter(
                    name="context",
                    type="object",
                    description="Surrounding context for the action",
                    required=False,
                ),
                _METADATA,
                _TIMESTAMP,
                _REGISTER_DIVT,
                _ALSO_REGISTER_DIVT,
            ],
            required_permission="user",
        ),
        ToolDefinition(
            name="vf.worldstate.create",
            description="Write a generic event to the worldstate ledger.",
            parameters=[
                ToolParameter(name="kind", type="string", description="Event kind"),
                ToolParameter(name="data", type="object", description="Event payload"),
                _METADATA,
                _TIMESTAMP,
            ],
            required_permission="user",
        ),
        ToolDefinition(
            name="vf.score.privacy",
            description=(
                "Score answer confidence from evidence identifiers, hashes and "
                "similarities only. No literal text is sent."
            ),
            parameters=[
                ToolParameter(
                    name="evidence",
                    type="array",
                    description="Evidence items (at least one)",
                    items=_PRIVACY_EVIDENCE_ITEM,
                ),
                ToolParameter(name="query_id", type="string", description="Query identifier", required=False),
                ToolParameter(name="answer_id", type="string", description="Answer identifier", required=False),
                ToolParameter(
                    name="model_signals",
                    type="object",
                    description="Optional model-side confidence signals",
                    required=False,
                ),
            ],
            required_permission="guest",
        ),
        ToolDefinition(
            name="vf.score.full",
            description=(
                "Score answer confidence, support and faithfulness using the query, "
                "answer and full evidence text."
            ),
            parameters=[
                ToolParameter(name="query", type="string", description="User query"),
                ToolParameter(name="answer", type="string", description="Generated answer"),
                ToolParameter(
                    name="evidence",
                    type="array",
                    description="Evidence items with text (at least one)",
                    items=_FULL_EVIDENCE_ITEM,
                ),
                ToolParameter(
                    name="log_worldstate",
                    type="string",
                    description="Whether the API should log the scoring to worldstate. Default: none",
                    required=False,
                    enum=["none", "minimal", "full"],
                    default="none",
                ),
            ],
            required_permission="guest",
        ),
        ToolDefinition(
            name="vf.keys.create",
            description="Create a new VectorForge API key. The secret is only returned once.",
            parameters=[
                ToolParameter(name="label", type="string", description="Key label", required=False),
                ToolParameter(
                    name="expires_at",
                    type="string",
                    description="ISO-8601 expiry time",
                    required=False,
                ),
            ],
            required_permission="admin",
        ),
        ToolDefinition(
            name="vf.keys.list",
            description="List API keys for the current tenant.",
            parameters=[],
            required_permission="admin",
        ),
        ToolDefinition(
            name="vf.keys.revoke",
            description="Revoke an API key.",
            parameters=[
                ToolParameter(name="api_key_id", type="string", description="Key to revoke"),
            ],
            required_permission="admin",
        ),
        ToolDefinition(
            name="vf.erasure.request",
            description="Erase a worldstate entry's payload (right to erasure).",
            parameters=[
                ToolParameter(name="wsl_id", type="string", description="Worldstate entry to erase"),
                ToolParameter(name="reason", type="string", description="Reason for erasure", required=False),
            ],
            required_permission="admin",
        ),
        ToolDefinition(
            name="vf.divt.revoke",
            description="Revoke a DIVT so that later verification reports it as revoked.",
            parameters=[
                ToolParameter(name="divt_id", type="string", description="DIVT to revoke"),
                ToolParameter(name="reason", type="string", description="Reason for revocation", required=False),
            ],
            required_permission="admin",
        ),
    ],
)
