"""Canonical hashing for registered content.

Each function returns a base64-encoded SHA3-512 digest of a deterministic
byte serialisation, so logically identical content always hashes the same
way on registration and on later verification.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
import math
import struct
import unicodedata
from typing import Any

CONTENT_V1 = "content_v1"
JSON_CANON_V1 = "json_canon_v1"
EMBEDDING_V1 = "embedding_v1"
IMAGE_V1 = "image_v1"
CUSTOM_V1 = "custom_v1"


def _digest(data: bytes) -> str:
    return base64.b64encode(hashlib.sha3_512(data).digest()).decode("ascii")


def canonical_text(text: str) -> bytes:
    """NFC-normalise, fold line endings to LF and encode as UTF-8."""
    normalized = unicodedata.normalize("NFC", text)
    normalized = normalized.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.encode("utf-8")


def canonical_json(value: Any) -> bytes:
    """Serialise with sorted keys and no insignificant whitespace.

    Raises:
        ValueError: If the value holds NaN/Infinity or non-JSON types.
    """
    try:
        text = json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except TypeError as e:
        raise ValueError(f"value is not JSON-serialisable: {e}") from e
    return text.encode("utf-8")


def canonical_embedding(vector: list[float]) -> bytes:
    """Pack each component as a little-endian IEEE-754 double.

    Raises:
        ValueError: On an empty vector, a non-numeric or boolean component,
            or a NaN/infinite value.
    """
    if not vector:
        raise ValueError("embedding must contain at least one number")
    for i, x in enumerate(vector):
        if isinstance(x, bool) or not isinstance(x, (int, float)):
            raise ValueError(f"embedding[{i}] is not a number")
        if not math.isfinite(x):
            raise ValueError(f"embedding[{i}] is not finite")
    return struct.pack(f"<{len(vector)}d", *(float(x) for x in vector))


def decode_image(data_b64: str) -> bytes:
    """Strictly decode base64 image data.

    Raises:
        ValueError: If the string is not valid base64.
    """
    try:
        return base64.b64decode(data_b64, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 image data: {e}") from e


def hash_content_v1(text: str) -> str:
    return _digest(canonical_text(text))


def hash_json_v1(value: Any) -> str:
    return _digest(canonical_json(value))


def hash_embedding_v1(vector: list[float]) -> str:
    return _digest(canonical_embedding(vector))


def hash_image_v1(image: bytes) -> str:
    return _digest(image)
