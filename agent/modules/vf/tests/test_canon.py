"""Tests for canonical serialisation and hashing."""

from __future__ import annotations

import base64
import hashlib
import struct

import pytest

from modules.vf import canon


def _sha3_b64(data: bytes) -> str:
    return base64.b64encode(hashlib.sha3_512(data).digest()).decode()


# ---------------------------------------------------------------------------
# content_v1
# ---------------------------------------------------------------------------


def test_content_hash_is_sha3_512_of_utf8():
    assert canon.hash_content_v1("hello") == _sha3_b64(b"hello")


def test_content_hash_folds_line_endings():
    assert canon.hash_content_v1("a\r\nb\rc") == canon.hash_content_v1("a\nb\nc")


def test_content_hash_normalises_unicode():
    # "é" precomposed vs "e" + combining acute
    assert canon.hash_content_v1("caf\u00e9") == canon.hash_content_v1("cafe\u0301")


def test_content_hash_digest_length():
    raw = base64.b64decode(canon.hash_content_v1("x"))
    assert len(raw) == 64


# ---------------------------------------------------------------------------
# json_canon_v1
# ---------------------------------------------------------------------------


def test_json_key_order_does_not_matter():
    a = {"b": 1, "a": {"y": [1, 2], "x": "z"}}
    b = {"a": {"x": "z", "y": [1, 2]}, "b": 1}
    assert canon.hash_json_v1(a) == canon.hash_json_v1(b)


def test_json_serialisation_is_compact_and_unescaped():
    assert canon.canonical_json({"b": "ü", "a": 1}) == '{"a":1,"b":"ü"}'.encode()


def test_json_rejects_nan():
    with pytest.raises(ValueError):
        canon.canonical_json({"x": float("nan")})


def test_json_rejects_unserialisable():
    with pytest.raises(ValueError, match="not JSON-serialisable"):
        canon.canonical_json({"x": object()})


# ---------------------------------------------------------------------------
# embedding_v1
# ---------------------------------------------------------------------------


def test_embedding_packs_little_endian_doubles():
    assert canon.canonical_embedding([1, 0.5]) == struct.pack("<2d", 1.0, 0.5)


def test_embedding_int_and_float_hash_equal():
    assert canon.hash_embedding_v1([1, 2]) == canon.hash_embedding_v1([1.0, 2.0])


@pytest.mark.parametrize(
    "vector,match",
    [
        ([], "at least one"),
        ([0.1, True], r"embedding\[1\] is not a number"),
        ([0.1, "0.2"], r"embedding\[1\] is not a number"),
        ([float("inf")], r"embedding\[0\] is not finite"),
    ],
)
def test_embedding_rejects_bad_vectors(vector, match):
    with pytest.raises(ValueError, match=match):
        canon.canonical_embedding(vector)


# ---------------------------------------------------------------------------
# image_v1
# ---------------------------------------------------------------------------


def test_image_hash_is_over_decoded_bytes():
    raw = b"\x89PNG\r\n\x1a\n"
    encoded = base64.b64encode(raw).decode()
    assert canon.hash_image_v1(canon.decode_image(encoded)) == _sha3_b64(raw)


def test_image_rejects_invalid_base64():
    with pytest.raises(ValueError, match="invalid base64"):
        canon.decode_image("not base64!!")
