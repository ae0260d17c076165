"""In-memory first-level schema cache."""

from graphql import GraphQLSchema


class InMemoryEndpointSchemaCache:
    """Process-lifetime mapping from endpoint name to composed schema."""

    def __init__(self) -> None:
        self._schemas: dict[str, GraphQLSchema] = {}

    def get(self, endpoint: str) -> GraphQLSchema | None:
        return self._schemas.get(endpoint)

    def set(self, endpoint: str, schema: GraphQLSchema) -> None:
        self._schemas[endpoint] = schema

    def delete(self, endpoint: str) -> bool:
        return self._schemas.pop(endpoint, None) is not None

    def clear(self) -> None:
        self._schemas.clear()

    def __contains__(self, endpoint: object) -> bool:
        return endpoint in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
