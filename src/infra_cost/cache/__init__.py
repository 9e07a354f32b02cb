"""Cost data cache.

This package provides the caching layer in front of cloud provider adapters:
- Cache manager and process-wide cache instance
- File and in-memory storage backends
- Cached provider wrapper with per-operation TTLs
- Cache configuration, TTL parsing and display helpers
"""

# Backend implementations
from .backends.base import CacheBackend
from .backends.file import FileBackend
from .backends.memory import MemoryBackend

# Cached provider wrapper
from .cached_provider import CachedProviderWrapper, wrap_with_cache
from .config import CacheConfig, load_cache_config, parse_ttl, validate_cache_settings

# Error handling
from .errors import (
    CacheBackendError,
    CacheConfigurationError,
    CacheError,
    CacheKeyError,
    CacheSerializationError,
    GracefulDegradationMixin,
)
from .factory import BackendFactory
from .formatting import format_bytes, format_cache_stats, format_ttl

# Cache key generation
from .key_builder import CacheKeyBuilder, inventory_data_type, trend_data_type
from .manager import CostCacheManager, get_global_cache, reset_global_cache
from .models import CacheEntry, CacheStats, DateRange

__all__ = [
    # Manager
    "CostCacheManager",
    "get_global_cache",
    "reset_global_cache",
    # Backends
    "CacheBackend",
    "FileBackend",
    "MemoryBackend",
    "BackendFactory",
    # Wrapper
    "CachedProviderWrapper",
    "wrap_with_cache",
    # Configuration
    "CacheConfig",
    "load_cache_config",
    "parse_ttl",
    "validate_cache_settings",
    # Models
    "CacheEntry",
    "CacheStats",
    "DateRange",
    # Keys
    "CacheKeyBuilder",
    "inventory_data_type",
    "trend_data_type",
    # Formatting
    "format_bytes",
    "format_cache_stats",
    "format_ttl",
    # Errors
    "CacheError",
    "CacheBackendError",
    "CacheConfigurationError",
    "CacheKeyError",
    "CacheSerializationError",
    "GracefulDegradationMixin",
]
