"""Core domain layer for schemaql."""

from schemaql.core.entities import EndpointConfiguration, SchemaQLConfig, SchemaSource
from schemaql.core.interfaces import (
    ICacheBackend,
    IEndpointSchemaCache,
    IResourceReader,
    ISerializer,
    SchemaEnvelope,
)
from schemaql.core.services import SchemaCache, SchemaService

__all__ = [
    # Entities
    "EndpointConfiguration",
    "SchemaQLConfig",
    "SchemaSource",
    # Interfaces
    "ICacheBackend",
    "IEndpointSchemaCache",
    "IResourceReader",
    "ISerializer",
    "SchemaEnvelope",
    # Services
    "SchemaCache",
    "SchemaService",
]
