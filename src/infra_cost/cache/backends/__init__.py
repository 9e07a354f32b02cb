"""Cache backend implementations.

This module provides the storage backends for the cost cache:
- FileBackend: Local file system storage (default)
- MemoryBackend: Process-local storage for ephemeral runs
- CacheBackend: Abstract base class for all backends
"""

from .base import CacheBackend
from .file import FileBackend
from .memory import MemoryBackend

__all__ = [
    "CacheBackend",
    "FileBackend",
    "MemoryBackend",
]
