"""
Canonical JSON Serialization

Provides deterministic JSON serialization for hashing and comparison.
Based on RFC 8785 (JSON Canonicalization Scheme) principles:
- Sorted keys (lexicographic)
- No whitespace
- Consistent number formatting
- UTF-8 encoding

Used to fingerprint catalog packs and fact sets so callers can cache
analysis results keyed on exactly what produced them.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Mapping


def _default_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for non-standard types.

    Handles:
    - Enum: value
    - dataclass: dict
    - set/frozenset: sorted list
    - tuple: list
    """
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (set, frozenset)):
        # Sort for determinism
        return sorted(obj, key=str)
    if isinstance(obj, tuple):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    The output is deterministic: same input always produces same output.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        default=_default_serializer,
        ensure_ascii=False,
    )


def canonical_json_bytes(obj: Any) -> bytes:
    """Serialize object to canonical JSON as UTF-8 bytes."""
    return canonical_json(obj).encode("utf-8")


def content_hash(obj: Any) -> str:
    """
    Compute SHA-256 hash of canonical JSON representation.

    Returns:
        Hex-encoded SHA-256 hash string (64 characters)
    """
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()


def compute_catalog_hash(pack_data: Mapping[str, Any]) -> str:
    """
    Compute the content hash of a raw catalog pack.

    Hashes the parsed pack (not the file bytes), so formatting and key
    order in the YAML source do not change the hash.
    """
    return content_hash(dict(pack_data))


def compute_fact_set_hash(selections: Mapping[str, Any]) -> str:
    """
    Compute an order-independent hash of a fact set.

    Selections are serialized as sorted id lists per category and empty
    categories are dropped, so {"payloads": []} and {} hash identically.
    """
    normalized = {
        str(key.value if isinstance(key, Enum) else key): sorted(str(v) for v in values)
        for key, values in selections.items()
        if values
    }
    return content_hash(normalized)
