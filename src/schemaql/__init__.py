"""schemaql - Compose and cache executable GraphQL schemas per endpoint.

A Python library resolving named endpoint configurations into a single
executable GraphQL schema. Type definitions from inline SDL, files, package
resources or ready-made schemas are merged, the parsed SDL is cached in a
content-addressed store, and composed schemas are memoized per endpoint.

Example:
    from ariadne import SchemaDirectiveVisitor
    from schemaql import (
        DirectiveRegistry,
        FileSystemCacheBackend,
        ResolverRegistry,
        create_schema_service,
    )

    class QueryResolver:
        def hello(self, obj, info):
            return "world"

    resolvers = ResolverRegistry()
    resolvers.register("app.QueryResolver", QueryResolver)

    endpoints = {
        "public": {
            "schemas": [
                {"type_defs": "type Query { hello: String }",
                 "resolver_path_pattern": "app.{type}Resolver"},
                {"type_defs": "file://schema/products.graphql"},
            ],
        },
    }

    service = create_schema_service(
        endpoints,
        resolvers=resolvers,
        backend=FileSystemCacheBackend(".cache/schemaql"),
    )
    schema = await service.get_schema_for_endpoint("public")
"""

from schemaql.core.entities import (
    EndpointConfiguration,
    ResolverMap,
    SchemaQLConfig,
    SchemaSource,
    TypeResolvers,
    merge_resolver_maps,
)
from schemaql.core.interfaces import (
    ICacheBackend,
    IEndpointSchemaCache,
    IResourceReader,
    ISerializer,
    SchemaEnvelope,
)
from schemaql.core.services import (
    DirectiveRegistry,
    EnvelopeRegistry,
    ExecutableSchemaBuilder,
    Registry,
    ResolverMapBuilder,
    ResolverRegistry,
    SchemaCache,
    SchemaMerger,
    SchemaService,
    TypeDefLoader,
)
from schemaql.exceptions import (
    DirectiveInstantiationError,
    EmptySchemaConfigurationError,
    EndpointConfigurationError,
    EnvelopeContractError,
    ResolverInstantiationError,
    ResourceNotFoundError,
    SchemaBuildError,
    SchemaMergeConflictError,
    SchemaQLError,
    SerializationError,
    UnknownEndpointError,
)
from schemaql.factory import create_schema_service
from schemaql.infrastructure import (
    FileSystemCacheBackend,
    InMemoryCacheBackend,
    InMemoryEndpointSchemaCache,
    PickleSerializer,
    ResourceReader,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "EndpointConfiguration",
    "SchemaSource",
    "SchemaQLConfig",
    "ResolverMap",
    "TypeResolvers",
    "merge_resolver_maps",
    # Core interfaces
    "ICacheBackend",
    "IEndpointSchemaCache",
    "IResourceReader",
    "ISerializer",
    "SchemaEnvelope",
    # Core services
    "SchemaService",
    "SchemaCache",
    "TypeDefLoader",
    "ResolverMapBuilder",
    "ExecutableSchemaBuilder",
    "SchemaMerger",
    # Registries
    "Registry",
    "ResolverRegistry",
    "DirectiveRegistry",
    "EnvelopeRegistry",
    # Infrastructure implementations
    "InMemoryCacheBackend",
    "FileSystemCacheBackend",
    "InMemoryEndpointSchemaCache",
    "PickleSerializer",
    "ResourceReader",
    # Wiring
    "create_schema_service",
    # Errors
    "SchemaQLError",
    "EndpointConfigurationError",
    "UnknownEndpointError",
    "ResourceNotFoundError",
    "ResolverInstantiationError",
    "DirectiveInstantiationError",
    "EnvelopeContractError",
    "EmptySchemaConfigurationError",
    "SchemaBuildError",
    "SchemaMergeConflictError",
    "SerializationError",
]
