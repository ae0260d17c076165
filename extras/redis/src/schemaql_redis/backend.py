"""Redis backend for the shared AST cache."""

import logging
from datetime import timedelta

import redis.asyncio as redis

logger = logging.getLogger(__name__)

SCAN_COUNT = 500


class RedisCacheBackend:
    """Shares parsed type definitions between the workers of a deployment.

    AST cache keys are content-addressed: a key always stands for the parse
    of the same ordered SDL texts. Entries are therefore written with
    ``SET NX``; when several workers miss on the same key at once, the first
    write wins and later ones leave it untouched. Entries do not expire
    unless the AST cache is configured with a TTL, so bound memory with a
    Redis eviction policy such as ``allkeys-lru``.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        *,
        url: str = "redis://localhost:6379",
        namespace: str = "schemaql",
    ) -> None:
        """Initialize the Redis backend.

        Args:
            client: Redis client to use. Owned by the caller, who closes it.
            url: Connection URL used when no client is given.
            namespace: Prefix of every key this backend touches. Keys that
                already carry it, like the default AST cache keys, are used
                unchanged.
        """
        self._owns_client = client is None
        self._redis: redis.Redis = client if client is not None else redis.from_url(url)
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    async def get(self, key: str) -> bytes | None:
        return await self._redis.get(self._key(key))

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        """Store an entry unless one exists.

        Args:
            key: The cache key.
            value: The serialized document.
            ttl: Optional time-to-live, with millisecond precision.
        """
        expiry_ms = None
        if ttl is not None:
            expiry_ms = max(int(ttl / timedelta(milliseconds=1)), 1)

        stored = await self._redis.set(self._key(key), value, nx=True, px=expiry_ms)
        if not stored:
            logger.debug("AST cache entry %s was already stored", key)

    async def delete(self, key: str) -> bool:
        return await self._redis.unlink(self._key(key)) > 0

    async def exists(self, key: str) -> bool:
        return await self._redis.exists(self._key(key)) > 0

    async def clear(self) -> None:
        """Remove every entry in the namespace.

        Walks the namespace with SCAN and removes keys with UNLINK, so
        neither blocks the Redis server on large caches.
        """
        removed = 0
        cursor = 0
        while True:
            cursor, keys = await self._redis.scan(cursor, match=f"{self._namespace}:*", count=SCAN_COUNT)
            if keys:
                removed += await self._redis.unlink(*keys)
            if cursor == 0:
                break
        logger.info("Removed %d AST cache entries from namespace %s", removed, self._namespace)

    async def close(self) -> None:
        """Close the connection if this backend created it."""
        if self._owns_client:
            await self._redis.aclose()

    async def __aenter__(self) -> "RedisCacheBackend":
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        await self.close()

    def _key(self, key: str) -> str:
        if key.startswith(f"{self._namespace}:"):
            return key
        return f"{self._namespace}:{key}"
