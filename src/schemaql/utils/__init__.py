"""Utility helpers for schemaql."""

from schemaql.utils.hashing import concatenate_type_defs, hash_type_defs, hash_value

__all__ = [
    "concatenate_type_defs",
    "hash_type_defs",
    "hash_value",
]
