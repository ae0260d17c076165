"""Infrastructure layer implementations for schemaql."""

from schemaql.infrastructure.backends import FileSystemCacheBackend, InMemoryCacheBackend
from schemaql.infrastructure.caches import InMemoryEndpointSchemaCache
from schemaql.infrastructure.readers import ResourceReader
from schemaql.infrastructure.serializers import PickleSerializer

__all__ = [
    "FileSystemCacheBackend",
    "InMemoryCacheBackend",
    "InMemoryEndpointSchemaCache",
    "PickleSerializer",
    "ResourceReader",
]
