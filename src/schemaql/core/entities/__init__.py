"""Domain entities for schemaql."""

from schemaql.core.entities.endpoint_config import EndpointConfiguration, SchemaSource
from schemaql.core.entities.resolver_map import (
    ResolverMap,
    ResolverReference,
    TypeResolvers,
    merge_resolver_maps,
)
from schemaql.core.entities.schemaql_config import SchemaQLConfig

__all__ = [
    "EndpointConfiguration",
    "SchemaSource",
    "SchemaQLConfig",
    "ResolverMap",
    "ResolverReference",
    "TypeResolvers",
    "merge_resolver_maps",
]
