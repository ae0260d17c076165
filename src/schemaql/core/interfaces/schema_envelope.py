"""Schema envelope interface."""

from collections.abc import Awaitable
from typing import Protocol, runtime_checkable

from graphql import GraphQLSchema


@runtime_checkable
class SchemaEnvelope(Protocol):
    """Protocol for objects producing a ready-made executable schema.

    Envelopes bypass type definition composition entirely: the schema they
    return is used as is, or merged with the endpoint's other schemas.

    Example:
        >>> class ProductsEnvelope:
        ...     def get_schema(self) -> GraphQLSchema:
        ...         return make_executable_schema(type_defs, query)
        ...
        >>> envelopes.register("products", ProductsEnvelope)
    """

    def get_schema(self) -> GraphQLSchema | Awaitable[GraphQLSchema]:
        """Produce the executable schema."""
        ...
