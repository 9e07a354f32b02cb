"""File-based cache backend implementation."""

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

import aiofiles
import aiofiles.os

from ..errors import CacheBackendError, CacheSerializationError
from ..models import CacheEntry, CacheStats
from ..utils import CACHE_FILE_MODE, CachePathManager
from .base import CacheBackend

logger = logging.getLogger(__name__)


def _private_opener(path: str, flags: int) -> int:
    """Open new files with owner-only permissions."""
    return os.open(path, flags, CACHE_FILE_MODE)


class FileBackend(CacheBackend):
    """
    File-based cache backend implementation.

    Stores one pretty-printed JSON entry per file, named by a truncated
    sha256 digest of the logical key. Writes go through a temporary file and
    an atomic rename, so concurrent CLI processes sharing the directory see
    last-write-wins semantics and never a torn entry.
    """

    backend_type = "file"

    def __init__(self, cache_dir: Optional[str] = None):
        """
        Initialize file backend.

        Args:
            cache_dir: Optional custom cache directory path.
                       Defaults to ~/.infra-cost/cache/

        Raises:
            CacheBackendError: If the cache directory cannot be created
        """
        super().__init__()
        self.path_manager = CachePathManager(cache_dir)

        try:
            self.path_manager.ensure_cache_directory()
        except OSError as e:
            raise CacheBackendError(
                f"Failed to initialize file backend: {e}",
                backend_type=self.backend_type,
                cause=e,
            )

    @property
    def cache_dir(self) -> Path:
        return self.path_manager.get_cache_directory()

    async def get(self, key: str) -> Optional[CacheEntry[Any]]:
        """
        Retrieve an entry from its file.

        Missing, unreadable, corrupt, mismatched and expired entries are all
        reported as a miss.
        """
        cache_file = self.path_manager.get_cache_file_path(key)

        if not await aiofiles.os.path.exists(cache_file):
            self._record_miss()
            return None

        try:
            entry = await self._read_entry(cache_file)
        except FileNotFoundError:
            self._record_miss()
            return None
        except (json.JSONDecodeError, UnicodeDecodeError, CacheSerializationError) as e:
            logger.warning(f"Corrupted cache file {cache_file}: {e}")
            await self._remove_cache_file(cache_file)
            self._record_miss()
            return None
        except OSError as e:
            logger.warning(f"Cannot read cache file {cache_file}: {e}")
            self._record_miss()
            return None

        if entry.key != key:
            logger.debug(f"Cache file {cache_file.name} holds a different key, treating as miss")
            self._record_miss()
            return None

        if entry.is_expired():
            logger.debug(f"Cache entry expired for key: {key}")
            await self._remove_cache_file(cache_file)
            self._record_miss()
            return None

        self._record_hit()
        logger.debug(f"File backend cache hit for key: {key}")
        return entry

    async def set(self, key: str, entry: CacheEntry[Any]) -> None:
        """
        Store an entry atomically.

        Failures are logged and leave any previous entry untouched.
        """
        cache_file = self.path_manager.get_cache_file_path(key)
        temp_file = self.path_manager.get_temp_file_path(cache_file)

        try:
            payload = json.dumps(entry.to_dict(), indent=2, default=str)
        except (TypeError, ValueError) as e:
            logger.warning(f"Failed to serialize cache entry for key {key}: {e}")
            return

        try:
            self.path_manager.ensure_cache_directory()

            async with aiofiles.open(
                temp_file, "w", encoding="utf-8", opener=_private_opener
            ) as f:
                await f.write(payload)

            await aiofiles.os.rename(temp_file, cache_file)
            logger.debug(f"File backend cached data for key: {key} with TTL: {entry.ttl}ms")

        except OSError as e:
            if "No space left on device" in str(e):
                logger.warning(f"Disk full - cannot write cache file {cache_file}: {e}")
            else:
                logger.warning(f"Failed to write cache entry {cache_file}: {e}")
            await self._cleanup_temp_file(temp_file)

    async def delete(self, key: str) -> bool:
        cache_file = self.path_manager.get_cache_file_path(key)
        return await self._remove_cache_file(cache_file)

    async def clear(self) -> None:
        """Remove every entry file and reset the hit/miss counters."""
        deleted_count = 0
        failed_count = 0

        for cache_file in self.path_manager.list_cache_files():
            if await self._remove_cache_file(cache_file):
                deleted_count += 1
            elif cache_file.exists():
                failed_count += 1

        if failed_count > 0:
            logger.warning(f"Failed to delete {failed_count} cache files during clear")

        self._reset_counters()
        logger.info(f"Cleared {deleted_count} cache files from {self.cache_dir}")

    async def keys(self, pattern: Optional[str] = None) -> List[str]:
        """
        List logical keys by opening every entry file.

        Unreadable or corrupt files are skipped.
        """
        keys = []

        for cache_file in self.path_manager.list_cache_files():
            try:
                entry = await self._read_entry(cache_file)
            except (OSError, ValueError, CacheSerializationError) as e:
                logger.debug(f"Skipping unreadable cache file {cache_file}: {e}")
                continue

            if pattern is None or pattern in entry.key:
                keys.append(entry.key)

        return keys

    async def stats(self) -> CacheStats:
        """Scan the cache directory for entry count, size and age bounds."""
        stats = self._new_stats()

        for cache_file in self.path_manager.list_cache_files():
            try:
                file_stat = await aiofiles.os.stat(cache_file)
                entry = await self._read_entry(cache_file)
            except (OSError, ValueError, CacheSerializationError) as e:
                logger.debug(f"Skipping unreadable cache file {cache_file}: {e}")
                continue

            stats.total_entries += 1
            stats.total_size += file_stat.st_size
            stats.record_timestamp(entry.timestamp)

        return stats

    async def health_check(self) -> bool:
        """Check that the cache directory exists and is writable."""
        try:
            cache_dir = self.cache_dir
            return cache_dir.is_dir() and os.access(cache_dir, os.W_OK | os.X_OK)
        except OSError as e:
            logger.warning(f"File backend health check failed: {e}")
            return False

    async def _read_entry(self, cache_file: Path) -> CacheEntry[Any]:
        async with aiofiles.open(cache_file, "r", encoding="utf-8") as f:
            content = await f.read()
        return CacheEntry.from_dict(json.loads(content))

    async def _remove_cache_file(self, cache_file: Path) -> bool:
        try:
            await aiofiles.os.remove(cache_file)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Failed to remove cache file {cache_file}: {e}")
            return False

    async def _cleanup_temp_file(self, temp_file: Path) -> None:
        try:
            if temp_file.exists():
                await aiofiles.os.remove(temp_file)
        except OSError as e:
            logger.debug(f"Failed to clean up temporary cache file {temp_file}: {e}")
