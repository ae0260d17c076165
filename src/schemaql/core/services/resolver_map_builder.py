"""Resolver map builder service."""

from collections.abc import Mapping
from typing import Any

from schemaql.core.entities.endpoint_config import SchemaSource
from schemaql.core.entities.resolver_map import (
    ResolverMap,
    TypeResolvers,
    merge_resolver_maps,
)
from schemaql.core.services.registry import ResolverRegistry
from schemaql.exceptions import EndpointConfigurationError


class ResolverMapBuilder:
    """Builds the resolver map of an inline schema source.

    Discovery by path pattern runs first; explicit ``resolvers`` entries
    are merged on top so they win for the same type, while field entries
    from both survive.
    """

    def __init__(self, registry: ResolverRegistry) -> None:
        """Initialize the builder.

        Args:
            registry: Registry used for discovery by path pattern.
        """
        self._registry = registry

    def build(self, source: SchemaSource) -> ResolverMap:
        """Build the resolver map for a schema source.

        Identifiers are not instantiated here; unknown ones surface as
        ResolverInstantiationError when the schema is built.

        Args:
            source: An inline schema source.

        Returns:
            The accumulated ResolverMap.
        """
        resolvers: ResolverMap = {}

        if source.resolver_path_pattern:
            discovered = {
                type_name: TypeResolvers(resolver=identifier)
                for type_name, identifier in self._registry.discover(source.resolver_path_pattern).items()
            }
            resolvers = merge_resolver_maps(resolvers, discovered)

        if source.resolvers:
            resolvers = merge_resolver_maps(resolvers, self._explicit_resolvers(source.resolvers))

        return resolvers

    def _explicit_resolvers(self, configured: Mapping[str, Any]) -> ResolverMap:
        explicit: ResolverMap = {}
        for type_name, value in configured.items():
            if isinstance(value, str):
                explicit[type_name] = TypeResolvers(resolver=value)
            elif isinstance(value, Mapping):
                for field_name, reference in value.items():
                    if not (isinstance(reference, str) or callable(reference)):
                        raise EndpointConfigurationError(
                            f"Resolver for {type_name}.{field_name} must be an identifier or a callable"
                        )
                explicit[type_name] = TypeResolvers(fields=dict(value))
            else:
                raise EndpointConfigurationError(
                    f"Resolvers for type {type_name} must be an identifier or a field mapping"
                )
        return explicit
