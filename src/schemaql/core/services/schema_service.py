"""Schema service - composes and caches executable schemas per endpoint."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from ariadne import SchemaDirectiveVisitor
from graphql import GraphQLSchema

from schemaql.core.entities.endpoint_config import EndpointConfiguration
from schemaql.core.entities.resolver_map import ResolverMap, merge_resolver_maps
from schemaql.core.entities.schemaql_config import SchemaQLConfig
from schemaql.core.interfaces.endpoint_cache import IEndpointSchemaCache
from schemaql.core.services.registry import DirectiveRegistry, EnvelopeRegistry
from schemaql.core.services.resolver_map_builder import ResolverMapBuilder
from schemaql.core.services.schema_builder import ExecutableSchemaBuilder
from schemaql.core.services.schema_cache import SchemaCache
from schemaql.core.services.schema_merger import SchemaMerger
from schemaql.core.services.type_def_loader import TypeDefLoader
from schemaql.exceptions import (
    EmptySchemaConfigurationError,
    EndpointConfigurationError,
    UnknownEndpointError,
)

logger = logging.getLogger(__name__)


class SchemaService:
    """Domain service resolving endpoint names into executable schemas.

    This is the main entry point of schemaql, composing the type definition
    loader, resolver map builder, directive registry, AST cache, schema
    builder and schema merger.
    """

    def __init__(
        self,
        endpoints: Mapping[str, Mapping[str, Any] | EndpointConfiguration],
        schema_cache: SchemaCache,
        type_def_loader: TypeDefLoader,
        resolver_map_builder: ResolverMapBuilder,
        schema_builder: ExecutableSchemaBuilder,
        directives: DirectiveRegistry,
        envelopes: EnvelopeRegistry,
        endpoint_cache: IEndpointSchemaCache,
        merger: SchemaMerger | None = None,
        config: SchemaQLConfig | None = None,
    ) -> None:
        """Initialize the schema service.

        Args:
            endpoints: Endpoint name to raw settings or parsed configuration.
            schema_cache: Content-addressed cache of parsed type definitions.
            type_def_loader: Loader for type definition sources.
            resolver_map_builder: Builder for per-source resolver maps.
            schema_builder: Builder for executable schemas.
            directives: Registry of schema directive visitors.
            envelopes: Registry of schema envelopes.
            endpoint_cache: First-level cache of composed schemas.
            merger: Merger used when an endpoint yields several schemas.
            config: Optional configuration. Uses defaults if not provided.
        """
        self._endpoints = dict(endpoints)
        self._schema_cache = schema_cache
        self._type_def_loader = type_def_loader
        self._resolver_map_builder = resolver_map_builder
        self._schema_builder = schema_builder
        self._directives = directives
        self._envelopes = envelopes
        self._endpoint_cache = endpoint_cache
        self._merger = merger or SchemaMerger()
        self._config = config or SchemaQLConfig()

        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def config(self) -> SchemaQLConfig:
        """Get the configuration."""
        return self._config

    @property
    def endpoints(self) -> list[str]:
        """Get the configured endpoint names."""
        return list(self._endpoints)

    @property
    def schema_cache(self) -> SchemaCache:
        """Get the AST cache."""
        return self._schema_cache

    def get_endpoint_configuration(self, endpoint: str) -> EndpointConfiguration:
        """Get the parsed configuration of an endpoint.

        Args:
            endpoint: The endpoint name.

        Returns:
            The endpoint configuration.

        Raises:
            UnknownEndpointError: If the endpoint is not configured.
            EndpointConfigurationError: If its settings are malformed.
        """
        raw = self._endpoints.get(endpoint)
        if raw is None:
            raise UnknownEndpointError(endpoint)
        if isinstance(raw, EndpointConfiguration):
            return raw
        return EndpointConfiguration.from_mapping(endpoint, raw)

    async def get_schema_for_endpoint(self, endpoint: str) -> GraphQLSchema:
        """Return the executable schema of an endpoint.

        Args:
            endpoint: The endpoint name.

        Returns:
            The composed executable schema.

        Raises:
            UnknownEndpointError: If the endpoint is not configured.
            SchemaQLError: Any composition error, see schemaql.exceptions.
        """
        cached = self._cached_schema(endpoint)
        if cached is not None:
            return cached

        configuration = self.get_endpoint_configuration(endpoint)

        lock = self._locks.setdefault(endpoint, asyncio.Lock())
        async with lock:
            # Another task may have composed it while we waited
            cached = self._cached_schema(endpoint)
            if cached is not None:
                return cached

            schema = await self.compose(configuration)

            if self._config.first_level_cache_enabled:
                self._endpoint_cache.set(endpoint, schema)

        logger.info("Composed schema for endpoint %s", endpoint)
        return schema

    async def compose(self, configuration: EndpointConfiguration) -> GraphQLSchema:
        """Compose the executable schema of an endpoint configuration.

        Bypasses the first-level cache.

        Args:
            configuration: The endpoint configuration.

        Returns:
            The composed executable schema.
        """
        executable_schemas: list[GraphQLSchema] = []
        type_defs: list[str] = []
        resolvers: ResolverMap = {}
        directives: dict[str, type[SchemaDirectiveVisitor]] = {}

        for source in configuration.schemas:
            if source.schema_envelope is not None:
                logger.debug("Endpoint %s: using schema envelope %s", configuration.name, source.schema_envelope)
                executable_schemas.append(await self._envelopes.get_schema(source.schema_envelope))
                continue

            if source.type_defs is None:
                raise EndpointConfigurationError(
                    "Schema source must define either type_defs or schema_envelope",
                    endpoint=configuration.name,
                )
            type_defs.append(self._type_def_loader.load(source.type_defs))
            resolvers = merge_resolver_maps(resolvers, self._resolver_map_builder.build(source))
            directives.update(self._directives.instantiate(source.schema_directives))

        # Endpoint-level directives override per-source ones
        directives.update(self._directives.instantiate(configuration.schema_directives))

        built_schema: GraphQLSchema | None = None
        if type_defs:
            document = await self._schema_cache.parse(type_defs)
            built_schema = self._schema_builder.build(document, resolvers, directives)

        if built_schema is not None:
            executable_schemas.append(built_schema)

        if not executable_schemas:
            raise EmptySchemaConfigurationError(
                f'Endpoint "{configuration.name}" does not configure any schema',
                endpoint=configuration.name,
            )

        if len(executable_schemas) == 1:
            return executable_schemas[0]

        logger.debug("Endpoint %s: merging %d schemas", configuration.name, len(executable_schemas))
        return self._merger.merge(executable_schemas)

    def invalidate(self, endpoint: str | None = None) -> None:
        """Drop first-level cache entries.

        Args:
            endpoint: The endpoint to drop, or None to drop all of them.
        """
        if endpoint is None:
            self._endpoint_cache.clear()
        else:
            self._endpoint_cache.delete(endpoint)

    def _cached_schema(self, endpoint: str) -> GraphQLSchema | None:
        if not self._config.first_level_cache_enabled:
            return None
        return self._endpoint_cache.get(endpoint)
