"""Pytest configuration for schemaql tests."""

from typing import Any

import pytest
from ariadne import SchemaDirectiveVisitor
from graphql import GraphQLField, default_field_resolver

from schemaql import (
    DirectiveRegistry,
    EnvelopeRegistry,
    InMemoryCacheBackend,
    ResolverRegistry,
)


class QueryResolver:
    """Type-level resolver object used across tests."""

    def hello(self, obj: Any, info: Any) -> str:
        return "world"

    def a(self, obj: Any, info: Any) -> str:
        return "from-a"


class UpperDirective(SchemaDirectiveVisitor):
    """Upper-cases string field results."""

    def visit_field_definition(self, field: GraphQLField, object_type: Any) -> GraphQLField:
        original = field.resolve or default_field_resolver

        def resolve_upper(obj: Any, info: Any, **kwargs: Any) -> Any:
            result = original(obj, info, **kwargs)
            return result.upper() if isinstance(result, str) else result

        field.resolve = resolve_upper
        return field


class ShoutDirective(UpperDirective):
    """Same as @upper, with an exclamation mark."""

    def visit_field_definition(self, field: GraphQLField, object_type: Any) -> GraphQLField:
        field = super().visit_field_definition(field, object_type)
        upper = field.resolve

        def resolve_shout(obj: Any, info: Any, **kwargs: Any) -> Any:
            return f"{upper(obj, info, **kwargs)}!"

        field.resolve = resolve_shout
        return field


@pytest.fixture
def resolver_registry() -> ResolverRegistry:
    """Create a resolver registry with a discoverable Query resolver."""
    registry = ResolverRegistry()
    registry.register("app.resolvers.QueryResolver", QueryResolver)
    return registry


@pytest.fixture
def directive_registry() -> DirectiveRegistry:
    """Create a directive registry with @upper and @shout visitors."""
    registry = DirectiveRegistry()
    registry.register_visitor("app.directives.Upper", UpperDirective)
    registry.register_visitor("app.directives.Shout", ShoutDirective)
    return registry


@pytest.fixture
def envelope_registry() -> EnvelopeRegistry:
    """Create an empty envelope registry."""
    return EnvelopeRegistry()


@pytest.fixture
def memory_backend() -> InMemoryCacheBackend:
    """Create an in-memory AST cache backend."""
    return InMemoryCacheBackend(maxsize=100)
