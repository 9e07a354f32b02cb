"""Cost cache manager: key construction and cache policy over a storage backend."""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from .backends.base import CacheBackend
from .config import CacheConfig, load_cache_config
from .factory import BackendFactory
from .key_builder import CacheKeyBuilder
from .models import CacheEntry, CacheStats, DateRange, now_ms

logger = logging.getLogger(__name__)


class CostCacheManager:
    """
    Translates domain-level cache requests into storage backend operations.

    The manager owns its backend exclusively and applies the default TTL to
    entries written without one. All operations are coroutines because the
    file backend performs file I/O.
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        backend: Optional[CacheBackend] = None,
    ):
        """
        Initialize the cache manager.

        Args:
            config: Cache configuration. Defaults to CacheConfig().
            backend: Optional pre-built backend, bypassing backend selection
        """
        self._config = config or CacheConfig()
        self._key_builder = CacheKeyBuilder(self._config.prefix)
        self._backend = backend or BackendFactory.create_backend_with_fallback(self._config)

        logger.debug(
            f"CostCacheManager initialized with {self._backend.backend_type} backend "
            f"(default TTL: {self._config.ttl}ms)"
        )

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    def generate_key(
        self,
        account: str,
        profile: str,
        region: str,
        data_type: str,
        provider: Optional[str] = None,
        date_range: Optional[DateRange] = None,
    ) -> str:
        """
        Generate a deterministic cache key.

        Raises:
            CacheKeyError: If a key component is invalid
        """
        return self._key_builder.build_key(
            account=account,
            profile=profile,
            region=region,
            data_type=data_type,
            provider=provider,
            date_range=date_range,
        )

    async def get(self, key: str) -> Optional[Any]:
        """
        Retrieve cached data by key.

        Returns:
            The cached payload if present and live, None otherwise
        """
        entry = await self._backend.get(key)
        return entry.data if entry is not None else None

    async def get_entry(self, key: str) -> Optional[CacheEntry[Any]]:
        """Retrieve the full entry, including timestamp, TTL and metadata."""
        return await self._backend.get(key)

    async def set(
        self,
        key: str,
        data: Any,
        account: str,
        profile: str,
        region: str,
        ttl: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Store data stamped with the current time.

        Args:
            key: Cache key
            data: JSON-serializable payload
            account: Account the data belongs to
            profile: Profile the data was fetched with
            region: Region the data was fetched for
            ttl: TTL override in milliseconds. If None, uses the configured default.
            metadata: Optional informational metadata
        """
        entry = CacheEntry(
            key=key,
            data=data,
            timestamp=now_ms(),
            ttl=ttl or self._config.ttl,
            account=account,
            profile=profile,
            region=region,
            metadata=metadata,
        )
        await self._backend.set(key, entry)

    async def has(self, key: str) -> bool:
        """True iff a live entry exists for the key."""
        return await self._backend.get(key) is not None

    async def invalidate(self, key: str) -> bool:
        """Delete one entry. Returns True if an entry was removed."""
        return await self._backend.delete(key)

    async def invalidate_pattern(self, pattern: str) -> int:
        """
        Delete every entry whose key contains ``pattern``.

        Returns:
            Number of entries deleted
        """
        count = 0
        for key in await self._backend.keys(pattern):
            if await self._backend.delete(key):
                count += 1

        if count:
            logger.debug(f"Invalidated {count} cache entries matching pattern: {pattern}")
        return count

    async def invalidate_account(self, account: str) -> int:
        """Delete every entry scoped to ``account``."""
        return await self.invalidate_pattern(f":{account}:")

    async def invalidate_profile(self, profile: str) -> int:
        """Delete every entry fetched with ``profile``."""
        return await self.invalidate_pattern(f":{profile}:")

    async def clear(self) -> None:
        await self._backend.clear()

    async def get_stats(self) -> CacheStats:
        return await self._backend.stats()

    async def get_keys(self, pattern: Optional[str] = None) -> List[str]:
        return await self._backend.keys(pattern)

    def get_config(self) -> CacheConfig:
        """Get a copy of the cache configuration."""
        return replace(self._config)

    async def is_stale(self, key: str) -> bool:
        """
        True if the entry is absent or past its liveness window.

        Absent and expired are deliberately not distinguished; callers that
        need to tell them apart should use ``get_entry``.
        """
        entry = await self._backend.get(key)
        if entry is None:
            return True
        return entry.is_expired()

    async def get_time_to_live(self, key: str) -> Optional[int]:
        """
        Remaining time until expiry.

        Returns:
            Milliseconds floored at zero, or None if the key does not exist
        """
        entry = await self._backend.get(key)
        if entry is None:
            return None
        return entry.remaining_ms()

    async def prune(self) -> int:
        """
        Delete every stale entry.

        This is the only operation that reclaims space held by expired
        entries nobody reads again.

        Returns:
            Number of stale entries removed
        """
        pruned = 0
        for key in await self._backend.keys():
            if await self.is_stale(key):
                # Reading an expired entry already purges it
                await self._backend.delete(key)
                pruned += 1

        if pruned:
            logger.info(f"Pruned {pruned} expired cache entries")
        return pruned


_global_cache: Optional[CostCacheManager] = None


def get_global_cache(config: Optional[CacheConfig] = None) -> CostCacheManager:
    """
    Get or create the process-wide cache manager.

    A new manager is built on first use, from ``config`` or else from the
    configuration file and environment, and whenever ``config`` differs from
    the configuration of the current one.
    """
    global _global_cache

    if _global_cache is None:
        _global_cache = CostCacheManager(config or load_cache_config())
    elif config is not None and config != _global_cache.get_config():
        _global_cache = CostCacheManager(config)
    return _global_cache


def reset_global_cache() -> None:
    """Drop the process-wide cache manager (for testing)."""
    global _global_cache
    _global_cache = None
