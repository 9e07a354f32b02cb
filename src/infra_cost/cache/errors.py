"""Cache error hierarchy and graceful degradation helpers."""

import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class CacheError(Exception):
    """Base exception for cache-related errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class CacheBackendError(CacheError):
    """Error in cache backend operations."""

    def __init__(
        self,
        message: str,
        backend_type: str = "unknown",
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.backend_type = backend_type


class CacheSerializationError(CacheError):
    """Error serializing/deserializing cache data."""

    pass


class CacheKeyError(CacheError):
    """Error with cache key format or validation."""

    pass


class CacheConfigurationError(CacheError):
    """Error in cache configuration."""

    pass


class GracefulDegradationMixin:
    """
    Mixin to provide graceful degradation for cache operations.

    When a cache operation fails, the fallback result is used instead and the
    failure is logged. Cache faults must never change the outcome of the
    operation being cached, only its latency.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._degradation_count = 0

    async def with_graceful_degradation(
        self,
        cache_operation: Callable[[], Awaitable[Any]],
        fallback_operation: Callable[[], Any],
        operation_name: str = "cache operation",
    ) -> Any:
        """
        Await a cache operation, degrading to a fallback on any failure.

        Args:
            cache_operation: Zero-argument coroutine function to try first
            fallback_operation: Zero-argument callable producing the fallback result
            operation_name: Name of operation for logging

        Returns:
            Result from the cache operation or from the fallback
        """
        try:
            return await cache_operation()
        except Exception as e:
            self._degradation_count += 1
            logger.warning(f"Cache {operation_name} failed, continuing without cache: {e}")
            return fallback_operation()

    def get_degradation_stats(self) -> dict:
        """Get graceful degradation statistics."""
        return {"degradation_count": self._degradation_count}

    def reset_degradation_stats(self) -> None:
        """Reset degradation statistics (for testing)."""
        self._degradation_count = 0
