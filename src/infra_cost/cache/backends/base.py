"""Cache backend interface for pluggable cache storage."""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..models import CacheEntry, CacheStats

logger = logging.getLogger(__name__)


class CacheBackend(ABC):
    """
    Abstract base class for cache backends.

    Defines the standard interface that all cache backends must implement
    to provide pluggable storage for the cost cache. Implementations must
    not raise on storage faults: reads degrade to a miss and writes to a
    logged no-op.
    """

    backend_type = "unknown"

    def __init__(self) -> None:
        self._hit_count = 0
        self._miss_count = 0

    @abstractmethod
    async def get(self, key: str) -> Optional[CacheEntry[Any]]:
        """
        Retrieve a live entry from the backend.

        Args:
            key: Logical cache key

        Returns:
            The entry if present and not expired, None otherwise
        """

    @abstractmethod
    async def set(self, key: str, entry: CacheEntry[Any]) -> None:
        """
        Store an entry, overwriting any existing entry at the key.

        Args:
            key: Logical cache key
            entry: Entry to persist
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove an entry.

        Args:
            key: Logical cache key

        Returns:
            True if an entry was removed
        """

    @abstractmethod
    async def clear(self) -> None:
        """Remove all entries and reset hit/miss counters."""

    @abstractmethod
    async def keys(self, pattern: Optional[str] = None) -> List[str]:
        """
        List logical keys of stored entries.

        Args:
            pattern: Optional substring the keys must contain

        Returns:
            Matching logical keys
        """

    @abstractmethod
    async def stats(self) -> CacheStats:
        """Compute statistics for the stored entries."""

    async def health_check(self) -> bool:
        """Check if the backend is usable. Backends without checks are always healthy."""
        return True

    def _record_hit(self) -> None:
        self._hit_count += 1

    def _record_miss(self) -> None:
        self._miss_count += 1

    def _reset_counters(self) -> None:
        self._hit_count = 0
        self._miss_count = 0

    def _new_stats(self) -> CacheStats:
        return CacheStats(
            hit_count=self._hit_count,
            miss_count=self._miss_count,
            backend_type=self.backend_type,
        )
