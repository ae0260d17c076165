"""File system cache backend implementation."""

import asyncio
import hashlib
import logging
import os
import tempfile
import time
from datetime import timedelta
from pathlib import Path

logger = logging.getLogger(__name__)


class FileSystemCacheBackend:
    """Durable cache backend storing one file per key.

    Entries survive process restarts. Writes go to a temporary file in the
    cache directory and are moved into place with ``os.replace``, so a
    reader never observes a partially written entry. File operations run in
    a worker thread to keep the event loop free.
    """

    def __init__(
        self,
        directory: str | os.PathLike[str],
        default_ttl: float | None = None,
    ) -> None:
        """Initialize the file system cache backend.

        Args:
            directory: Directory holding the cache files. Created if missing.
            default_ttl: Default TTL in seconds, based on file modification
                time. None keeps entries until they are deleted.
        """
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)
        self._default_ttl = default_ttl

    @property
    def directory(self) -> Path:
        """Return the cache directory."""
        return self._directory

    async def get(self, key: str) -> bytes | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value as bytes, or None if not found or expired.
        """
        return await asyncio.to_thread(self._read, self._path_for(key))

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        """Store value atomically.

        Args:
            key: The cache key.
            value: The value to store as bytes.
            ttl: Optional time-to-live. Ignored; expiry uses the backend
                default and the file modification time.
        """
        path = self._path_for(key)
        await asyncio.to_thread(self._write, path, value)
        logger.debug("Stored cache entry %s at %s", key, path)

    async def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        return await asyncio.to_thread(self._remove, self._path_for(key))

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        return await asyncio.to_thread(self._contains, self._path_for(key))

    async def clear(self) -> None:
        """Clear all cached values."""
        removed = await asyncio.to_thread(self._clear)
        logger.debug("Removed %d cache entries from %s", removed, self._directory)

    def _path_for(self, key: str) -> Path:
        # Keys may contain characters that are not valid in file names
        digest = hashlib.sha256(key.encode()).hexdigest()
        return self._directory / f"{digest}.cache"

    def _read(self, path: Path) -> bytes | None:
        try:
            if self._is_expired(path):
                path.unlink(missing_ok=True)
                return None
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def _write(self, path: Path, value: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _remove(self, path: Path) -> bool:
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False

    def _contains(self, path: Path) -> bool:
        try:
            return path.is_file() and not self._is_expired(path)
        except FileNotFoundError:
            return False

    def _clear(self) -> int:
        removed = 0
        for path in self._directory.glob("*.cache"):
            path.unlink(missing_ok=True)
            removed += 1
        return removed

    def _is_expired(self, path: Path) -> bool:
        if self._default_ttl is None:
            return False
        return time.time() - path.stat().st_mtime > self._default_ttl
