"""Tests for FileSystemCacheBackend."""

import asyncio
import os
import time
from pathlib import Path

import pytest

from schemaql.infrastructure.backends.filesystem import FileSystemCacheBackend


class TestFileSystemCacheBackend:
    """Tests for FileSystemCacheBackend."""

    @pytest.fixture
    def backend(self, tmp_path: Path) -> FileSystemCacheBackend:
        """Create a backend in a temp directory."""
        return FileSystemCacheBackend(tmp_path / "cache")

    @pytest.mark.asyncio
    async def test_set_and_get(self, backend: FileSystemCacheBackend) -> None:
        """Test basic set and get operations."""
        await backend.set("schemaql:ast:abc", b"value1")

        assert await backend.get("schemaql:ast:abc") == b"value1"
        assert await backend.get("schemaql:ast:other") is None

    @pytest.mark.asyncio
    async def test_survives_new_instance(self, tmp_path: Path) -> None:
        """Test that entries persist for a new backend on the same directory."""
        await FileSystemCacheBackend(tmp_path).set("key1", b"value1")

        assert await FileSystemCacheBackend(tmp_path).get("key1") == b"value1"

    @pytest.mark.asyncio
    async def test_no_temp_files_left(self, backend: FileSystemCacheBackend) -> None:
        """Test that atomic writes leave only the final entry behind."""
        await backend.set("key1", b"value1")
        await backend.set("key1", b"value2")

        files = list(backend.directory.iterdir())
        assert len(files) == 1
        assert files[0].suffix == ".cache"
        assert await backend.get("key1") == b"value2"

    @pytest.mark.asyncio
    async def test_delete_exists_clear(self, backend: FileSystemCacheBackend) -> None:
        """Test delete, exists and clear."""
        await backend.set("key1", b"value1")
        await backend.set("key2", b"value2")

        assert await backend.exists("key1") is True
        assert await backend.delete("key1") is True
        assert await backend.delete("key1") is False
        assert await backend.exists("key1") is False

        await backend.clear()
        assert await backend.get("key2") is None

    @pytest.mark.asyncio
    async def test_expired_entry(self, tmp_path: Path) -> None:
        """Test that entries older than the TTL are dropped."""
        backend = FileSystemCacheBackend(tmp_path, default_ttl=60)
        await backend.set("key1", b"value1")
        entry = next(tmp_path.glob("*.cache"))
        old = time.time() - 120
        os.utime(entry, (old, old))

        assert await backend.exists("key1") is False
        assert await backend.get("key1") is None
        assert not entry.exists()

    @pytest.mark.asyncio
    async def test_file_operations_run_in_worker_thread(
        self, backend: FileSystemCacheBackend, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that blocking file operations are moved off the event loop."""
        offloaded = []
        to_thread = asyncio.to_thread

        async def recording_to_thread(func, *args, **kwargs):
            offloaded.append(func.__name__)
            return await to_thread(func, *args, **kwargs)

        monkeypatch.setattr(asyncio, "to_thread", recording_to_thread)

        await backend.set("key1", b"value1")
        await backend.get("key1")
        await backend.exists("key1")
        await backend.delete("key1")
        await backend.clear()

        assert offloaded == ["_write", "_read", "_contains", "_remove", "_clear"]
