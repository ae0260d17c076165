"""Schema cache - content-addressed cache of parsed type definitions."""

import logging
from collections.abc import Callable, Sequence

from graphql import DocumentNode, GraphQLError, parse

from schemaql.core.entities.schemaql_config import SchemaQLConfig
from schemaql.core.interfaces.cache_backend import ICacheBackend
from schemaql.core.interfaces.serializer import ISerializer
from schemaql.exceptions import SchemaBuildError, SerializationError
from schemaql.utils.hashing import concatenate_type_defs, hash_type_defs

logger = logging.getLogger(__name__)

Parser = Callable[[str], DocumentNode]


def parse_type_defs(source: str) -> DocumentNode:
    """Parse SDL into a document without location info.

    Locations hold the token chain of the whole source, which makes cached
    entries large and slow to load.
    """
    return parse(source, no_location=True)


class SchemaCache:
    """Memoizes the parsed AST of concatenated type definitions.

    Entries are keyed by a hash of the ordered list of SDL texts, so
    endpoints composing the same texts in the same order share an entry.
    Writes are idempotent, which makes concurrent misses on the same key
    harmless.
    """

    def __init__(
        self,
        backend: ICacheBackend,
        serializer: ISerializer,
        config: SchemaQLConfig | None = None,
        parser: Parser = parse_type_defs,
    ) -> None:
        """Initialize the schema cache.

        Args:
            backend: The cache backend to use for storage.
            serializer: The serializer for encoding/decoding documents.
            config: Optional configuration. Uses defaults if not provided.
            parser: Function turning SDL into a DocumentNode.
        """
        self._backend = backend
        self._serializer = serializer
        self._config = config or SchemaQLConfig()
        self._parser = parser

        # Statistics
        self._hits = 0
        self._misses = 0
        self._parses = 0

    @property
    def config(self) -> SchemaQLConfig:
        """Get the configuration."""
        return self._config

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, parses, and total requests.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "parses": self._parses,
            "total": self._hits + self._misses,
        }

    def key_for(self, type_defs: Sequence[str]) -> str:
        """Build the cache key for an ordered list of SDL texts.

        Args:
            type_defs: SDL texts in composition order.

        Returns:
            The cache key.
        """
        return f"{self._config.key_prefix}:ast:{hash_type_defs(type_defs)}"

    async def parse(self, type_defs: Sequence[str]) -> DocumentNode:
        """Return the parsed document for the concatenated SDL texts.

        Args:
            type_defs: SDL texts in composition order.

        Returns:
            The parsed DocumentNode, from cache when available.

        Raises:
            SchemaBuildError: If the concatenated SDL is not valid syntax.
        """
        if not self._config.ast_cache_enabled:
            return self._parse(type_defs)

        key = self.key_for(type_defs)
        cached_data = await self._backend.get(key)

        if cached_data is not None:
            document = self._load(key, cached_data)
            if document is not None:
                self._hits += 1
                logger.debug("AST cache hit for %s", key)
                return document
            # Backends may refuse to overwrite an existing entry
            await self._backend.delete(key)

        self._misses += 1
        logger.debug("AST cache miss for %s", key)

        document = self._parse(type_defs)
        await self._backend.set(key, self._serializer.serialize(document), self._config.ast_cache_ttl)
        return document

    async def invalidate(self, type_defs: Sequence[str]) -> bool:
        """Drop the entry for an ordered list of SDL texts.

        Returns:
            True if an entry existed, False otherwise.
        """
        return await self._backend.delete(self.key_for(type_defs))

    async def clear(self) -> None:
        """Clear all cached documents."""
        await self._backend.clear()
        self._hits = 0
        self._misses = 0
        self._parses = 0

    def _parse(self, type_defs: Sequence[str]) -> DocumentNode:
        self._parses += 1
        try:
            return self._parser(concatenate_type_defs(type_defs))
        except GraphQLError as e:
            raise SchemaBuildError(f"Invalid type definitions: {e.message}") from e

    def _load(self, key: str, data: bytes) -> DocumentNode | None:
        try:
            return self._serializer.deserialize(data)
        except SerializationError as e:
            logger.warning("Discarding unreadable AST cache entry %s: %s", key, e)
            return None
