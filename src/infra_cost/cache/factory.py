"""Backend factory for creating cache backend instances."""

import logging

from .backends.base import CacheBackend
from .backends.file import FileBackend
from .backends.memory import MemoryBackend
from .config import CacheConfig
from .errors import CacheBackendError

logger = logging.getLogger(__name__)


class BackendFactory:
    """
    Factory class for creating cache backend instances.

    ``memory`` selects the in-memory backend. ``file`` selects the file
    backend, and so do ``redis`` and unknown types, with a warning: there is
    no redis backend and an unsupported setting must never stop a command.
    """

    @staticmethod
    def create_backend(config: CacheConfig) -> CacheBackend:
        """
        Create a cache backend instance based on configuration.

        Args:
            config: Cache configuration

        Returns:
            CacheBackend instance

        Raises:
            CacheBackendError: If the file backend cannot create its directory
        """
        backend_type = config.type.lower()

        if backend_type == "memory":
            logger.debug(f"Creating memory backend with max_entries: {config.max_entries}")
            return MemoryBackend(max_entries=config.max_entries)

        if backend_type == "redis":
            logger.warning("Redis cache not yet implemented, using file-based cache")
        elif backend_type != "file":
            logger.warning(f"Unknown cache type '{backend_type}', using file-based cache")

        logger.debug(f"Creating file backend with cache_dir: {config.cache_dir}")
        return FileBackend(cache_dir=config.cache_dir)

    @staticmethod
    def create_backend_with_fallback(config: CacheConfig) -> CacheBackend:
        """
        Create a cache backend, falling back to memory if the file backend fails.

        Args:
            config: Cache configuration

        Returns:
            CacheBackend instance (in-memory if the cache directory is unusable)
        """
        try:
            return BackendFactory.create_backend(config)
        except CacheBackendError as e:
            logger.warning(f"Failed to create {config.type} backend: {e}")
            logger.info("Falling back to in-memory caching for this run")
            return MemoryBackend(max_entries=config.max_entries)
