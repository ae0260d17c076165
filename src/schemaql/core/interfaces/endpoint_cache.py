"""First-level endpoint schema cache interface."""

from typing import Protocol

from graphql import GraphQLSchema


class IEndpointSchemaCache(Protocol):
    """Contract for the per-endpoint schema cache.

    Holds composed schemas for the lifetime of the serving process.
    Kept separate from ICacheBackend so the AST store can be swapped
    without touching this cache.
    """

    def get(self, endpoint: str) -> GraphQLSchema | None:
        """Return the cached schema for an endpoint, or None."""
        ...

    def set(self, endpoint: str, schema: GraphQLSchema) -> None:
        """Store the composed schema for an endpoint."""
        ...

    def delete(self, endpoint: str) -> bool:
        """Drop the cached schema for an endpoint.

        Returns:
            True if an entry existed, False otherwise.
        """
        ...

    def clear(self) -> None:
        """Drop all cached schemas."""
        ...
