"""First-level schema caches."""

from schemaql.infrastructure.caches.memory import InMemoryEndpointSchemaCache

__all__ = [
    "InMemoryEndpointSchemaCache",
]
