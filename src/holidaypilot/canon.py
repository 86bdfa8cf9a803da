"""
Canonical JSON for holiday collections.

A collection is rendered through HolidayCollection.to_list(), which only
yields strings, ints, lists and dicts. Those are written with sorted keys,
no whitespace and raw UTF-8 (French names stay readable), so two equal
computations always produce the same bytes and the same SHA-256 digest.
"""
from __future__ import annotations

import hashlib
import json
from typing import Any


def canonical_json(payload: Any) -> str:
    """
    Serialize a JSON-native payload with sorted keys and compact separators.

    Raises:
        TypeError: If payload holds anything but JSON-native values

    Example:
        >>> canonical_json({"year": 2021, "jurisdiction": "CA"})
        '{"jurisdiction":"CA","year":2021}'
    """
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonical_json_bytes(payload: Any) -> bytes:
    return canonical_json(payload).encode("utf-8")


def content_hash(payload: Any) -> str:
    """Hex SHA-256 of the canonical UTF-8 bytes (64 characters)."""
    return hashlib.sha256(canonical_json_bytes(payload)).hexdigest()
