"""Cache backends for the AST cache."""

from schemaql.infrastructure.backends.filesystem import FileSystemCacheBackend
from schemaql.infrastructure.backends.memory import InMemoryCacheBackend

__all__ = [
    "FileSystemCacheBackend",
    "InMemoryCacheBackend",
]
