"""Redis backend for the schemaql AST cache."""

from schemaql_redis.backend import RedisCacheBackend

__all__ = ["RedisCacheBackend"]
