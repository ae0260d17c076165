"""Serializers for cached documents."""

from schemaql.infrastructure.serializers.pickle import PickleSerializer

__all__ = [
    "PickleSerializer",
]
