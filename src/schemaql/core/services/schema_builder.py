"""Builds executable schemas from parsed type definitions."""

import logging
from collections.abc import Mapping
from typing import Any

from ariadne import InterfaceType, ObjectType, SchemaDirectiveVisitor, UnionType
from graphql import (
    DocumentNode,
    GraphQLError,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    assert_valid_schema,
    build_ast_schema,
)

from schemaql.core.entities.resolver_map import ResolverMap, ResolverReference, TypeResolvers
from schemaql.core.services.registry import ResolverRegistry
from schemaql.exceptions import ResolverInstantiationError, SchemaBuildError

logger = logging.getLogger(__name__)

TYPE_RESOLVER_ATTRIBUTE = "resolve_type"

Bindable = ObjectType | UnionType


class ExecutableSchemaBuilder:
    """Turns a document, a resolver map and directive visitors into a schema.

    Steps:
    1. Build the schema from the document, including ``extend`` definitions
    2. Bind resolvers with ariadne's ObjectType, InterfaceType and UnionType
    3. Apply schema directive visitors
    4. Validate the resulting schema
    """

    def __init__(self, registry: ResolverRegistry) -> None:
        """Initialize the builder.

        Args:
            registry: Registry resolving resolver identifiers.
        """
        self._registry = registry

    def build(
        self,
        document: DocumentNode,
        resolvers: ResolverMap,
        directives: Mapping[str, type[SchemaDirectiveVisitor]] | None = None,
    ) -> GraphQLSchema:
        """Build an executable schema.

        Args:
            document: Parsed type definitions.
            resolvers: Resolver map to bind.
            directives: Directive name to visitor mapping.

        Returns:
            The executable schema.

        Raises:
            ResolverInstantiationError: If a resolver cannot be created.
            SchemaBuildError: If graphql-core or ariadne reject the schema.
        """
        try:
            schema = build_ast_schema(document)
        except (GraphQLError, TypeError) as e:
            raise SchemaBuildError(f"Could not build schema: {e}") from e

        bindables = self._create_bindables(schema, resolvers)

        try:
            for bindable in bindables:
                bindable.bind_to_schema(schema)
            if directives:
                SchemaDirectiveVisitor.visit_schema_directives(schema, dict(directives))
            assert_valid_schema(schema)
        except (GraphQLError, TypeError, ValueError) as e:
            raise SchemaBuildError(f"Could not build schema: {e}") from e

        return schema

    def _create_bindables(self, schema: GraphQLSchema, resolvers: ResolverMap) -> list[Bindable]:
        bindables: list[Bindable] = []
        for type_name, entry in resolvers.items():
            graphql_type = schema.type_map.get(type_name)
            if graphql_type is None:
                if entry.fields:
                    raise SchemaBuildError(
                        f"Resolvers configured for type {type_name}, which is not defined in the schema"
                    )
                # Discovered resolvers may cover types of other endpoints
                logger.debug("Skipping resolver %s for undefined type %s", entry.resolver, type_name)
                continue

            bindables.append(self._create_bindable(graphql_type, entry))
        return bindables

    def _create_bindable(self, graphql_type: GraphQLNamedType, entry: TypeResolvers) -> Bindable:
        instance = self._registry.create(entry.resolver) if entry.resolver is not None else None
        type_resolver = _lookup(instance, TYPE_RESOLVER_ATTRIBUTE)

        if isinstance(graphql_type, GraphQLUnionType):
            if entry.fields:
                raise SchemaBuildError(f"Union {graphql_type.name} has no fields to resolve")
            return UnionType(graphql_type.name, type_resolver)

        bindable: ObjectType
        if isinstance(graphql_type, GraphQLInterfaceType):
            bindable = InterfaceType(graphql_type.name, type_resolver)
        elif isinstance(graphql_type, GraphQLObjectType):
            bindable = ObjectType(graphql_type.name)
        else:
            raise SchemaBuildError(
                f"Cannot bind resolvers to {type(graphql_type).__name__} {graphql_type.name}"
            )

        if instance is not None:
            for field_name in graphql_type.fields:
                resolver = _lookup(instance, field_name)
                if resolver is not None:
                    bindable.set_field(field_name, resolver)

        for field_name, reference in entry.fields.items():
            bindable.set_field(field_name, self._resolve_reference(reference))

        return bindable

    def _resolve_reference(self, reference: ResolverReference) -> Any:
        if not isinstance(reference, str):
            return reference

        resolver = self._registry.create(reference)
        if not callable(resolver):
            raise ResolverInstantiationError(
                f"Resolver {reference!r} is not callable",
                reference,
            )
        return resolver


def _lookup(instance: Any, name: str) -> Any:
    if instance is None:
        return None
    if isinstance(instance, Mapping):
        candidate = instance.get(name)
    else:
        candidate = getattr(instance, name, None)
    return candidate if callable(candidate) else None
