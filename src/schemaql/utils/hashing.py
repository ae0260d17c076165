"""Hashing utilities for cache key generation."""

import hashlib
import json
from collections.abc import Sequence
from typing import Any


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal SHA-256 digest.
    """
    # Normalize to JSON with sorted keys for determinism
    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()


def hash_type_defs(type_defs: Sequence[str]) -> str:
    """Hash an ordered sequence of type definition texts.

    The digest covers the list itself rather than its concatenation, so
    ``["a", "b"]`` and ``["b", "a"]`` (or ``["ab"]``) never collide.

    Args:
        type_defs: SDL texts in composition order.

    Returns:
        A hexadecimal SHA-256 digest.
    """
    return hash_value(list(type_defs))


def concatenate_type_defs(type_defs: Sequence[str]) -> str:
    """Join SDL texts into a single document.

    Each text is stripped; empty texts and exact duplicates are dropped,
    keeping the first occurrence.

    Args:
        type_defs: SDL texts in composition order.

    Returns:
        The concatenated SDL separated by blank lines.
    """
    seen: set[str] = set()
    parts: list[str] = []
    for text in type_defs:
        stripped = text.strip()
        if not stripped or stripped in seen:
            continue
        seen.add(stripped)
        parts.append(stripped)
    return "\n\n".join(parts)
