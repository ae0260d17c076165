"""Wiring helpers for SchemaService."""

from collections.abc import Mapping
from typing import Any

from schemaql.core.entities.endpoint_config import EndpointConfiguration
from schemaql.core.entities.schemaql_config import SchemaQLConfig
from schemaql.core.interfaces.cache_backend import ICacheBackend
from schemaql.core.interfaces.endpoint_cache import IEndpointSchemaCache
from schemaql.core.interfaces.resource_reader import IResourceReader
from schemaql.core.interfaces.serializer import ISerializer
from schemaql.core.services.registry import (
    DirectiveRegistry,
    EnvelopeRegistry,
    ResolverRegistry,
)
from schemaql.core.services.resolver_map_builder import ResolverMapBuilder
from schemaql.core.services.schema_builder import ExecutableSchemaBuilder
from schemaql.core.services.schema_cache import SchemaCache
from schemaql.core.services.schema_merger import SchemaMerger
from schemaql.core.services.schema_service import SchemaService
from schemaql.core.services.type_def_loader import TypeDefLoader
from schemaql.infrastructure.backends.memory import InMemoryCacheBackend
from schemaql.infrastructure.caches.memory import InMemoryEndpointSchemaCache
from schemaql.infrastructure.readers.resources import ResourceReader
from schemaql.infrastructure.serializers.pickle import PickleSerializer


def create_schema_service(
    endpoints: Mapping[str, Mapping[str, Any] | EndpointConfiguration],
    *,
    resolvers: ResolverRegistry | None = None,
    directives: DirectiveRegistry | None = None,
    envelopes: EnvelopeRegistry | None = None,
    backend: ICacheBackend | None = None,
    serializer: ISerializer | None = None,
    reader: IResourceReader | None = None,
    endpoint_cache: IEndpointSchemaCache | None = None,
    config: SchemaQLConfig | None = None,
) -> SchemaService:
    """Create a SchemaService with default collaborators.

    Example:
        resolvers = ResolverRegistry()
        resolvers.register("app.resolvers.QueryResolver", QueryResolver)

        service = create_schema_service(
            {"public": {"type_defs": "file://schema/public.graphql",
                        "resolver_path_pattern": "app.resolvers.{type}Resolver"}},
            resolvers=resolvers,
            backend=FileSystemCacheBackend(".cache/schemaql"),
        )
        schema = await service.get_schema_for_endpoint("public")

    Args:
        endpoints: Endpoint name to raw settings or parsed configuration.
        resolvers: Resolver registry. Empty if not provided.
        directives: Directive visitor registry. Empty if not provided.
        envelopes: Schema envelope registry. Empty if not provided.
        backend: AST cache backend. In-memory if not provided.
        serializer: AST serializer. Pickle if not provided.
        reader: Resource reader for type definition locators.
        endpoint_cache: First-level cache. In-memory if not provided.
        config: Optional configuration.

    Returns:
        A ready to use SchemaService.
    """
    config = config or SchemaQLConfig()
    resolvers = resolvers if resolvers is not None else ResolverRegistry()

    schema_cache = SchemaCache(
        backend=backend if backend is not None else InMemoryCacheBackend(),
        serializer=serializer if serializer is not None else PickleSerializer(),
        config=config,
    )

    return SchemaService(
        endpoints=endpoints,
        schema_cache=schema_cache,
        type_def_loader=TypeDefLoader(reader if reader is not None else ResourceReader()),
        resolver_map_builder=ResolverMapBuilder(resolvers),
        schema_builder=ExecutableSchemaBuilder(resolvers),
        directives=directives if directives is not None else DirectiveRegistry(),
        envelopes=envelopes if envelopes is not None else EnvelopeRegistry(),
        endpoint_cache=endpoint_cache if endpoint_cache is not None else InMemoryEndpointSchemaCache(),
        merger=SchemaMerger(),
        config=config,
    )
