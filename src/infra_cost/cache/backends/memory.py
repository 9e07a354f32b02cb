"""In-memory cache backend for ephemeral and CI use."""

import copy
import json
import logging
from typing import Any, Dict, List, Optional

from ..models import CacheEntry, CacheStats
from .base import CacheBackend

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000


class MemoryBackend(CacheBackend):
    """
    Process-local cache backend.

    Entries live in an insertion-ordered dict bounded by ``max_entries``.
    When a new key arrives at capacity, the entry with the oldest
    ``timestamp`` is evicted (FIFO by creation time, not LRU). Entries are
    copied on the way in and out, so callers never share state with the
    cache. Nothing is persisted.
    """

    backend_type = "memory"

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        super().__init__()
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._cache: Dict[str, CacheEntry[Any]] = {}

    async def get(self, key: str) -> Optional[CacheEntry[Any]]:
        entry = self._cache.get(key)

        if entry is None:
            self._record_miss()
            return None

        if entry.is_expired():
            del self._cache[key]
            self._record_miss()
            return None

        self._record_hit()
        return copy.deepcopy(entry)

    async def set(self, key: str, entry: CacheEntry[Any]) -> None:
        if key not in self._cache and len(self._cache) >= self.max_entries:
            oldest_key = self._find_oldest_key()
            if oldest_key is not None:
                del self._cache[oldest_key]
                logger.debug(f"Evicted oldest cache entry: {oldest_key}")

        self._cache[key] = copy.deepcopy(entry)

    async def delete(self, key: str) -> bool:
        return self._cache.pop(key, None) is not None

    async def clear(self) -> None:
        self._cache.clear()
        self._reset_counters()

    async def keys(self, pattern: Optional[str] = None) -> List[str]:
        if pattern is None:
            return list(self._cache)
        return [key for key in self._cache if pattern in key]

    async def stats(self) -> CacheStats:
        stats = self._new_stats()
        stats.total_entries = len(self._cache)

        for entry in self._cache.values():
            stats.total_size += len(json.dumps(entry.to_dict(), default=str))
            stats.record_timestamp(entry.timestamp)

        return stats

    def _find_oldest_key(self) -> Optional[str]:
        # Strict comparison keeps the first-inserted key on timestamp ties
        oldest_key = None
        oldest_time = None

        for key, entry in self._cache.items():
            if oldest_time is None or entry.timestamp < oldest_time:
                oldest_time = entry.timestamp
                oldest_key = key

        return oldest_key
