"""Tests for SchemaMerger."""

from typing import Any

import pytest
from ariadne import EnumType, ObjectType, make_executable_schema
from graphql import GraphQLSchema, graphql_sync

from schemaql import SchemaMergeConflictError, SchemaMerger


def products_schema() -> GraphQLSchema:
    query = ObjectType("Query")
    query.set_field("products", lambda *_: [{"name": "Chair", "status": "in_stock"}])
    status = EnumType("Status", {"IN_STOCK": "in_stock", "SOLD_OUT": "sold_out"})
    return make_executable_schema(
        """
        enum Status { IN_STOCK SOLD_OUT }
        type Product { name: String status: Status }
        type Query { products: [Product] }
        """,
        query,
        status,
    )


def users_schema() -> GraphQLSchema:
    query = ObjectType("Query")
    query.set_field("users", lambda *_: [{"name": "Alice"}])
    mutation = ObjectType("Mutation")
    mutation.set_field("rename", lambda *_, name: {"name": name})
    user = ObjectType("User")
    user.set_field("name", lambda obj, *_: obj["name"].upper())
    return make_executable_schema(
        """
        type User { name: String }
        type Query { users: [User] }
        type Mutation { rename(name: String!): User }
        """,
        query,
        mutation,
        user,
    )


@pytest.fixture
def merger() -> SchemaMerger:
    """Create a schema merger."""
    return SchemaMerger()


class TestSchemaMerger:
    """Tests for SchemaMerger."""

    def test_single_schema_is_returned(self, merger: SchemaMerger) -> None:
        """Test that one schema is passed through untouched."""
        schema = products_schema()

        assert merger.merge([schema]) is schema

    def test_requires_schemas(self, merger: SchemaMerger) -> None:
        """Test that merging nothing is rejected."""
        with pytest.raises(ValueError):
            merger.merge([])

    def test_root_fields_are_merged(self, merger: SchemaMerger) -> None:
        """Test that root types expose the fields of all schemas."""
        merged = merger.merge([products_schema(), users_schema()])

        assert set(merged.query_type.fields) == {"products", "users"}
        assert set(merged.mutation_type.fields) == {"rename"}
        assert {"Product", "User", "Status"} <= set(merged.type_map)

    def test_resolvers_survive_merge(self, merger: SchemaMerger) -> None:
        """Test that resolvers and enum values are copied to the merged schema."""
        merged = merger.merge([products_schema(), users_schema()])

        result = graphql_sync(merged, "{ products { name status } users { name } }")
        mutation = graphql_sync(merged, 'mutation { rename(name: "bob") { name } }')

        assert result.errors is None
        assert result.data == {
            "products": [{"name": "Chair", "status": "IN_STOCK"}],
            "users": [{"name": "ALICE"}],
        }
        assert mutation.data == {"rename": {"name": "BOB"}}

    def test_identical_types_are_shared(self, merger: SchemaMerger) -> None:
        """Test that a type defined identically twice is accepted."""
        first = make_executable_schema("type User { name: String }\ntype Query { me: User }")
        second = make_executable_schema("type User { name: String }\ntype Query { users: [User] }")

        merged = merger.merge([first, second])

        assert set(merged.query_type.fields) == {"me", "users"}

    def test_conflicting_type(self, merger: SchemaMerger) -> None:
        """Test that differing definitions of a type are a conflict."""
        first = make_executable_schema("type User { name: String }\ntype Query { me: User }")
        second = make_executable_schema("type User { id: ID }\ntype Query { users: [User] }")

        with pytest.raises(SchemaMergeConflictError) as exc_info:
            merger.merge([first, second])

        assert exc_info.value.type_name == "User"

    def test_conflict_is_order_independent(self, merger: SchemaMerger) -> None:
        """Test that conflicts are detected whichever schema comes first."""
        first = make_executable_schema("type User { name: String }\ntype Query { me: User }")
        second = make_executable_schema("type User { id: ID }\ntype Query { users: [User] }")

        with pytest.raises(SchemaMergeConflictError):
            merger.merge([second, first])

    def test_duplicate_root_field(self, merger: SchemaMerger) -> None:
        """Test that a root field defined twice is a conflict."""
        first = make_executable_schema("type Query { me: String }")
        second = make_executable_schema("type Query { me: String }")

        with pytest.raises(SchemaMergeConflictError) as exc_info:
            merger.merge([first, second])

        assert exc_info.value.type_name == "Query"

    def test_conflicting_directive(self, merger: SchemaMerger) -> None:
        """Test that differing directive definitions are a conflict."""
        first = make_executable_schema("directive @auth on FIELD_DEFINITION\ntype Query { a: String }")
        second = make_executable_schema("directive @auth on OBJECT\ntype Query { b: String }")

        with pytest.raises(SchemaMergeConflictError):
            merger.merge([first, second])

    def test_custom_root_type_names(self, merger: SchemaMerger) -> None:
        """Test that renamed root types are merged into Query."""
        root = ObjectType("RootQuery")
        root.set_field("legacy", lambda *_: "old")
        first = make_executable_schema(
            "schema { query: RootQuery }\ntype RootQuery { legacy: String }",
            root,
        )
        second = make_executable_schema("type Query { modern: String }")

        merged = merger.merge([first, second])
        result = graphql_sync(merged, "{ legacy modern }")

        assert merged.query_type.name == "Query"
        assert result.data == {"legacy": "old", "modern": None}

    def test_three_schemas(self, merger: SchemaMerger) -> None:
        """Test merging more than two schemas."""
        schemas = [
            make_executable_schema(f"type Query {{ field{index}: String }}")
            for index in range(3)
        ]

        merged = merger.merge(schemas)

        assert set(merged.query_type.fields) == {"field0", "field1", "field2"}

    def test_root_interfaces_are_kept(self, merger: SchemaMerger) -> None:
        """Test that interfaces implemented by a root type survive merging."""
        first = make_executable_schema(
            "interface Node { id: ID! }\ntype Query implements Node { id: ID! a: String }"
        )
        second = make_executable_schema("type Query { b: String }")

        merged = merger.merge([first, second])

        assert [interface.name for interface in merged.query_type.interfaces] == ["Node"]
        assert set(merged.query_type.fields) == {"id", "a", "b"}

    def test_references_to_custom_root_names_are_rewritten(self, merger: SchemaMerger) -> None:
        """Test that types pointing at a renamed root type point at Query."""
        first = make_executable_schema(
            """
            schema { query: RootQuery mutation: RootMutation }
            type RootQuery { a: String }
            type Payload { query: RootQuery }
            type RootMutation { touch: Payload }
            """
        )
        second = make_executable_schema("type Query { b: String }")

        merged = merger.merge([first, second])

        assert str(merged.type_map["Payload"].fields["query"].type) == "Query"
        assert merged.mutation_type.name == "Mutation"
        assert set(merged.query_type.fields) == {"a", "b"}
        assert "RootQuery" not in merged.type_map


class TestSchemaMergerRuntime:
    """Tests for runtime behaviour of types shared between schemas."""

    @staticmethod
    def user_schema(root_field: str, user: ObjectType | None = None) -> GraphQLSchema:
        query = ObjectType("Query")
        query.set_field(root_field, lambda *_: {"name": "alice"})
        bindables = [query] if user is None else [query, user]
        return make_executable_schema(
            f"type User {{ name: String }}\ntype Query {{ {root_field}: User }}",
            *bindables,
        )

    def test_different_resolvers_are_a_conflict(self, merger: SchemaMerger) -> None:
        """Test that two schemas resolving a shared field differently cannot merge."""
        user_a = ObjectType("User")
        user_a.set_field("name", lambda *_: "A")
        user_b = ObjectType("User")
        user_b.set_field("name", lambda *_: "B")

        with pytest.raises(SchemaMergeConflictError) as exc_info:
            merger.merge([self.user_schema("a", user_a), self.user_schema("b", user_b)])

        assert exc_info.value.type_name == "User"

    def test_resolver_bound_on_one_side_is_used(self, merger: SchemaMerger) -> None:
        """Test that a resolver bound by a later schema applies to the shared type."""
        user = ObjectType("User")
        user.set_field("name", lambda obj, *_: obj["name"].upper())

        merged = merger.merge([self.user_schema("a"), self.user_schema("b", user)])
        result = graphql_sync(merged, "{ a { name } b { name } }")

        assert result.data == {"a": {"name": "ALICE"}, "b": {"name": "ALICE"}}

    def test_same_resolver_on_both_sides(self, merger: SchemaMerger) -> None:
        """Test that binding the same resolver twice is not a conflict."""

        def resolve_name(obj: Any, info: Any) -> str:
            return "shared"

        user_a = ObjectType("User")
        user_a.set_field("name", resolve_name)
        user_b = ObjectType("User")
        user_b.set_field("name", resolve_name)

        merged = merger.merge([self.user_schema("a", user_a), self.user_schema("b", user_b)])
        result = graphql_sync(merged, "{ a { name } b { name } }")

        assert result.data == {"a": {"name": "shared"}, "b": {"name": "shared"}}

    def test_different_enum_values_are_a_conflict(self, merger: SchemaMerger) -> None:
        """Test that enum values bound differently cannot merge."""
        sdl = "enum Status {{ ON OFF }}\ntype Query {{ {field}: Status }}"
        first = make_executable_schema(sdl.format(field="a"), EnumType("Status", {"ON": 1, "OFF": 0}))
        second = make_executable_schema(sdl.format(field="b"), EnumType("Status", {"ON": "on", "OFF": "off"}))

        with pytest.raises(SchemaMergeConflictError) as exc_info:
            merger.merge([first, second])

        assert exc_info.value.type_name == "Status"
