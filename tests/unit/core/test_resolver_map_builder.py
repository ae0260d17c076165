"""Tests for ResolverMapBuilder."""

import pytest

from schemaql import (
    EndpointConfigurationError,
    ResolverMapBuilder,
    ResolverRegistry,
    SchemaSource,
)


def resolve_field2(obj, info):
    return "field2"


@pytest.fixture
def builder(resolver_registry: ResolverRegistry) -> ResolverMapBuilder:
    """Create a builder backed by the shared resolver registry."""
    return ResolverMapBuilder(resolver_registry)


class TestResolverMapBuilder:
    """Tests for ResolverMapBuilder."""

    def test_empty_without_resolvers(self, builder: ResolverMapBuilder) -> None:
        """Test that a source without resolvers builds an empty map."""
        source = SchemaSource(type_defs="type Query { a: String }")

        assert builder.build(source) == {}

    def test_discovery_by_path_pattern(self, builder: ResolverMapBuilder) -> None:
        """Test that registered resolvers are discovered by pattern."""
        source = SchemaSource(
            type_defs="type Query { hello: String }",
            resolver_path_pattern="app.resolvers.{type}Resolver",
        )

        resolvers = builder.build(source)

        assert set(resolvers) == {"Query"}
        assert resolvers["Query"].resolver == "app.resolvers.QueryResolver"
        assert resolvers["Query"].fields == {}

    def test_explicit_type_resolver_wins_over_discovery(self, builder: ResolverMapBuilder) -> None:
        """Test that explicit configuration wins for the same type."""
        source = SchemaSource.from_mapping(
            {
                "type_defs": "type Query { hello: String }",
                "resolver_path_pattern": "app.resolvers.{type}Resolver",
                "resolvers": {"Query": "app.custom.QueryResolver"},
            }
        )

        resolvers = builder.build(source)

        assert resolvers["Query"].resolver == "app.custom.QueryResolver"

    def test_discovered_and_explicit_fields_are_merged(self, builder: ResolverMapBuilder) -> None:
        """Test deep merge of discovered type resolvers and explicit fields."""
        source = SchemaSource.from_mapping(
            {
                "type_defs": "type Query { a: String field2: String }",
                "resolver_path_pattern": "app.resolvers.{type}Resolver",
                "resolvers": {"Query": {"field2": resolve_field2}},
            }
        )

        resolvers = builder.build(source)

        assert resolvers["Query"].resolver == "app.resolvers.QueryResolver"
        assert resolvers["Query"].fields == {"field2": resolve_field2}

    def test_unknown_identifiers_are_not_validated(self, builder: ResolverMapBuilder) -> None:
        """Test that identifiers are only recorded, never instantiated."""
        source = SchemaSource.from_mapping(
            {
                "type_defs": "type Query { a: String }",
                "resolvers": {"Query": "app.DoesNotExist", "User": {"name": "app.AlsoMissing"}},
            }
        )

        resolvers = builder.build(source)

        assert resolvers["Query"].resolver == "app.DoesNotExist"
        assert resolvers["User"].fields == {"name": "app.AlsoMissing"}

    def test_invalid_resolver_value(self, builder: ResolverMapBuilder) -> None:
        """Test that resolver values must be identifiers or field mappings."""
        source = SchemaSource.from_mapping(
            {"type_defs": "type Query { a: String }", "resolvers": {"Query": 42}}
        )

        with pytest.raises(EndpointConfigurationError):
            builder.build(source)
