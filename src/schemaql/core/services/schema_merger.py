"""Merges several executable schemas into one.

Root operation types are merged field by field into ``Query``, ``Mutation``
and ``Subscription``, whatever the source schemas call them; references to
custom root names are rewritten. Every other named type and directive may
appear in several schemas only if it is printed identically everywhere and
no two schemas bind different runtime behaviour (resolvers, type resolvers,
scalar coercion, enum values) to it; anything else is a conflict. The
merged schema is rebuilt from SDL, then the runtime behaviour is copied
over.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from graphql import (
    FieldDefinitionNode,
    GraphQLDirective,
    GraphQLEnumType,
    GraphQLError,
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    NamedTypeNode,
    NameNode,
    ObjectTypeDefinitionNode,
    TypeDefinitionNode,
    Visitor,
    build_schema,
    is_introspection_type,
    is_specified_directive,
    is_specified_scalar_type,
    parse,
    print_ast,
    print_type,
    visit,
)
from graphql.utilities.print_schema import print_directive

from schemaql.exceptions import SchemaMergeConflictError

logger = logging.getLogger(__name__)

ROOT_OPERATIONS = ("query", "mutation", "subscription")

ROOT_TYPE_NAMES = {
    "query": "Query",
    "mutation": "Mutation",
    "subscription": "Subscription",
}

FIELD_ATTRIBUTES = ("resolve", "subscribe")

TYPE_ATTRIBUTES: dict[type[GraphQLNamedType], tuple[str, ...]] = {
    GraphQLObjectType: ("is_type_of",),
    GraphQLInterfaceType: ("resolve_type",),
    GraphQLUnionType: ("resolve_type",),
    GraphQLScalarType: ("serialize", "parse_value", "parse_literal"),
}


class _RootRenamer(Visitor):
    """Rewrites references to custom root type names."""

    def __init__(self, renames: dict[str, str]) -> None:
        super().__init__()
        self.renames = renames

    def enter_named_type(self, node: NamedTypeNode, *_args: Any) -> NamedTypeNode | None:
        new_name = self.renames.get(node.name.value)
        if new_name is None:
            return None
        return NamedTypeNode(name=NameNode(value=new_name))


@dataclass
class _Runtime:
    """Runtime behaviour bound to one named type, merged across schemas."""

    attributes: dict[str, Any] = field(default_factory=dict)
    fields: dict[str, dict[str, Any]] = field(default_factory=dict)
    enum_values: dict[str, Any] = field(default_factory=dict)


@dataclass
class _Root:
    fields: dict[str, FieldDefinitionNode] = field(default_factory=dict)
    interfaces: dict[str, NamedTypeNode] = field(default_factory=dict)


@dataclass
class _MergeState:
    """Definitions collected from the source schemas."""

    type_sdl: dict[str, str] = field(default_factory=dict)
    directive_sdl: dict[str, str] = field(default_factory=dict)
    roots: dict[str, _Root] = field(
        default_factory=lambda: {operation: _Root() for operation in ROOT_OPERATIONS}
    )
    runtime: dict[str, _Runtime] = field(default_factory=dict)


class SchemaMerger:
    """Merges executable schemas, failing on irreconcilable conflicts."""

    def merge(self, schemas: Sequence[GraphQLSchema]) -> GraphQLSchema:
        """Merge schemas in order into a single executable schema.

        Args:
            schemas: The schemas to merge.

        Returns:
            The merged schema, or the only schema when one is given.

        Raises:
            SchemaMergeConflictError: If two schemas define the same root
                field, define the same type or directive differently, or
                bind different runtime behaviour to the same type.
        """
        if not schemas:
            raise ValueError("At least one schema is required")
        if len(schemas) == 1:
            return schemas[0]

        state = _MergeState()
        for schema in schemas:
            self._collect(schema, state)

        merged = self._build(state)
        self._copy_runtime(merged, state)

        logger.debug("Merged %d schemas into %d types", len(schemas), len(merged.type_map))
        return merged

    def _collect(self, schema: GraphQLSchema, state: _MergeState) -> None:
        root_operations: dict[str, str] = {}
        for operation in ROOT_OPERATIONS:
            root = getattr(schema, f"{operation}_type")
            if root is not None:
                root_operations[root.name] = operation

        renames = {
            name: ROOT_TYPE_NAMES[operation]
            for name, operation in root_operations.items()
            if name != ROOT_TYPE_NAMES[operation]
        }
        renamer = _RootRenamer(renames)

        for type_name, graphql_type in schema.type_map.items():
            if is_introspection_type(graphql_type) or is_specified_scalar_type(graphql_type):
                continue

            definition = _definition_of(graphql_type, renamer)
            operation = root_operations.get(type_name)
            if operation is not None:
                if not isinstance(definition, ObjectTypeDefinitionNode):
                    raise TypeError(f"Root type {type_name} must be an object type")
                self._collect_root(operation, definition, state)
                _merge_runtime(state, ROOT_TYPE_NAMES[operation], graphql_type)
                continue

            if type_name in ROOT_TYPE_NAMES.values():
                raise SchemaMergeConflictError(
                    f"Type {type_name} is not a root type in every schema",
                    type_name=type_name,
                )

            sdl = print_ast(definition)
            existing = state.type_sdl.setdefault(type_name, sdl)
            if existing != sdl:
                raise SchemaMergeConflictError(
                    f"Type {type_name} is defined differently in merged schemas",
                    type_name=type_name,
                )
            _merge_runtime(state, type_name, graphql_type)

        for directive in schema.directives:
            if not is_specified_directive(directive):
                self._collect_directive(directive, state)

    def _collect_root(
        self,
        operation: str,
        definition: ObjectTypeDefinitionNode,
        state: _MergeState,
    ) -> None:
        root = state.roots[operation]
        type_name = ROOT_TYPE_NAMES[operation]

        for field_node in definition.fields or ():
            field_name = field_node.name.value
            if field_name in root.fields:
                raise SchemaMergeConflictError(
                    f"Field {type_name}.{field_name} is defined in more than one schema",
                    type_name=type_name,
                )
            root.fields[field_name] = field_node

        for interface in definition.interfaces or ():
            root.interfaces.setdefault(interface.name.value, interface)

    def _collect_directive(self, directive: GraphQLDirective, state: _MergeState) -> None:
        sdl = print_directive(directive)
        existing = state.directive_sdl.setdefault(directive.name, sdl)
        if existing != sdl:
            raise SchemaMergeConflictError(
                f"Directive @{directive.name} is defined differently in merged schemas",
                type_name=directive.name,
            )

    def _build(self, state: _MergeState) -> GraphQLSchema:
        definitions = list(state.directive_sdl.values()) + list(state.type_sdl.values())
        for operation in ROOT_OPERATIONS:
            root = state.roots[operation]
            if not root.fields:
                continue
            node = ObjectTypeDefinitionNode(
                description=None,
                name=NameNode(value=ROOT_TYPE_NAMES[operation]),
                interfaces=tuple(root.interfaces.values()),
                directives=(),
                fields=tuple(root.fields.values()),
            )
            definitions.append(print_ast(node))

        try:
            return build_schema("\n\n".join(definitions))
        except (GraphQLError, TypeError) as e:
            raise SchemaMergeConflictError(f"Merged schema is invalid: {e}") from e

    def _copy_runtime(self, merged: GraphQLSchema, state: _MergeState) -> None:
        for type_name, runtime in state.runtime.items():
            target = merged.type_map[type_name]

            for attribute, value in runtime.attributes.items():
                setattr(target, attribute, value)

            if isinstance(target, (GraphQLObjectType, GraphQLInterfaceType)):
                for field_name, attributes in runtime.fields.items():
                    for attribute, value in attributes.items():
                        setattr(target.fields[field_name], attribute, value)
            elif isinstance(target, GraphQLEnumType):
                for value_name, value in runtime.enum_values.items():
                    target.values[value_name].value = value


def _definition_of(graphql_type: GraphQLNamedType, renamer: _RootRenamer) -> TypeDefinitionNode:
    node = parse(print_type(graphql_type), no_location=True).definitions[0]
    if renamer.renames:
        node = visit(node, renamer)
    return node  # type: ignore[return-value]


def _bound(owner: Any, attribute: str) -> Any:
    # Unset coercers of scalars fall back to class-level defaults
    return vars(owner).get(attribute) or None


def _merge_value(current: Any, incoming: Any, what: str, type_name: str) -> Any:
    if incoming is None:
        return current
    if current is None or current == incoming:
        return incoming
    raise SchemaMergeConflictError(
        f"{what} is bound differently in merged schemas",
        type_name=type_name,
    )


def _merge_runtime(state: _MergeState, type_name: str, graphql_type: GraphQLNamedType) -> None:
    runtime = state.runtime.setdefault(type_name, _Runtime())

    for attribute in ("extensions", *_type_attributes(graphql_type)):
        value = _merge_value(
            runtime.attributes.get(attribute),
            _bound(graphql_type, attribute),
            f"{attribute} of {type_name}",
            type_name,
        )
        if value is not None:
            runtime.attributes[attribute] = value

    if isinstance(graphql_type, (GraphQLObjectType, GraphQLInterfaceType)):
        for field_name, source_field in graphql_type.fields.items():
            _merge_field(runtime, type_name, field_name, source_field)
    elif isinstance(graphql_type, GraphQLEnumType):
        for value_name, enum_value in graphql_type.values.items():
            # Values built from SDL default to their name
            if enum_value.value == value_name:
                continue
            runtime.enum_values[value_name] = _merge_value(
                runtime.enum_values.get(value_name),
                enum_value.value,
                f"Enum value {type_name}.{value_name}",
                type_name,
            )


def _merge_field(runtime: _Runtime, type_name: str, field_name: str, source_field: GraphQLField) -> None:
    attributes = runtime.fields.setdefault(field_name, {})
    for attribute in (*FIELD_ATTRIBUTES, "extensions"):
        value = _merge_value(
            attributes.get(attribute),
            _bound(source_field, attribute),
            f"{attribute} of {type_name}.{field_name}",
            type_name,
        )
        if value is not None:
            attributes[attribute] = value


def _type_attributes(graphql_type: GraphQLNamedType) -> tuple[str, ...]:
    for kind, attributes in TYPE_ATTRIBUTES.items():
        if isinstance(graphql_type, kind):
            return attributes
    return ()
