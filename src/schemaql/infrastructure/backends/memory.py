"""In-memory cache backend implementation."""

from datetime import timedelta

from cachetools import LRUCache, TTLCache  # type: ignore[import-untyped]


class InMemoryCacheBackend:
    """In-memory cache backend using LRU with optional TTL support.

    Suitable for single-process deployments. Entries do not survive a
    process restart; use FileSystemCacheBackend or the Redis backend
    for a durable AST cache.
    """

    def __init__(
        self,
        maxsize: int = 128,
        default_ttl: float | None = None,
    ) -> None:
        """Initialize the in-memory cache backend.

        Args:
            maxsize: Maximum number of items in the cache.
            default_ttl: Default TTL in seconds for items. None disables
                expiry and keeps plain LRU eviction.
        """
        self._maxsize = maxsize
        self._default_ttl = default_ttl
        self._cache: LRUCache[str, bytes]
        if default_ttl is None:
            self._cache = LRUCache(maxsize=maxsize)
        else:
            self._cache = TTLCache(maxsize=maxsize, ttl=default_ttl)

    async def get(self, key: str) -> bytes | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value as bytes, or None if not found or expired.
        """
        result = self._cache.get(key)
        return result if isinstance(result, bytes) else None

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        """Store value with optional TTL.

        Note: cachetools TTLCache uses a global TTL, so per-item TTL
        is ignored. For precise per-item TTL, use the Redis backend.

        Args:
            key: The cache key.
            value: The value to store as bytes.
            ttl: Optional time-to-live. Ignored by this backend.
        """
        self._cache[key] = value

    async def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        return key in self._cache

    async def clear(self) -> None:
        """Clear all cached values."""
        self._cache.clear()

    def __len__(self) -> int:
        """Return the number of items in the cache."""
        return len(self._cache)

    def keys(self) -> list[str]:
        """Return the keys currently stored."""
        return list(self._cache.keys())

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
