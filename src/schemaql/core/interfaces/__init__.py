"""Core interfaces (Protocol classes) for schemaql."""

from schemaql.core.interfaces.cache_backend import ICacheBackend
from schemaql.core.interfaces.endpoint_cache import IEndpointSchemaCache
from schemaql.core.interfaces.resource_reader import IResourceReader
from schemaql.core.interfaces.schema_envelope import SchemaEnvelope
from schemaql.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheBackend",
    "IEndpointSchemaCache",
    "IResourceReader",
    "ISerializer",
    "SchemaEnvelope",
]
