"""Cache utilities for managing the cache directory and entry file paths."""

import hashlib
import logging
import os
import uuid
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path.home() / ".infra-cost" / "cache"

# Owner-only access: cached payloads carry account ids and billing data
CACHE_DIR_MODE = 0o700
CACHE_FILE_MODE = 0o600

# Hex characters of the sha256 digest used as the entry filename
FILENAME_HASH_LENGTH = 16


class CachePathManager:
    """Manages the cache directory structure and entry file paths."""

    def __init__(self, cache_dir: Optional[str] = None):
        """Initialize cache path manager.

        Args:
            cache_dir: Optional custom cache directory path.
                       Defaults to ~/.infra-cost/cache/
        """
        self.cache_dir = Path(cache_dir).expanduser() if cache_dir else DEFAULT_CACHE_DIR

    def ensure_cache_directory(self) -> None:
        """Create the cache directory if needed and restrict it to the owner.

        Raises:
            PermissionError: If insufficient permissions to create directory
            OSError: If directory cannot be created
        """
        try:
            self.cache_dir.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
            # mkdir honours the umask and leaves existing directories alone
            os.chmod(self.cache_dir, CACHE_DIR_MODE)
        except PermissionError as e:
            raise PermissionError(
                f"Permission denied creating cache directory {self.cache_dir}: {e}"
            )
        except OSError as e:
            if "No space left on device" in str(e):
                raise OSError(f"Disk full - cannot create cache directory {self.cache_dir}: {e}")
            raise OSError(f"Cannot create cache directory {self.cache_dir}: {e}")

    def get_cache_file_path(self, cache_key: str) -> Path:
        """Generate the file path for a cache key.

        The filename is a truncated sha256 digest of the key, so distinct keys
        can in principle share a file. Readers must compare the key stored in
        the entry with the requested one.

        Args:
            cache_key: The logical cache key

        Returns:
            Path object for the cache file
        """
        digest = hashlib.sha256(cache_key.encode("utf-8")).hexdigest()
        return self.cache_dir / f"{digest[:FILENAME_HASH_LENGTH]}.json"

    def get_temp_file_path(self, cache_file: Path) -> Path:
        """Temporary path, unique per write, used for atomic writes of ``cache_file``."""
        return cache_file.parent / f"{cache_file.name}.{os.getpid()}.{uuid.uuid4().hex[:8]}.tmp"

    def get_cache_directory(self) -> Path:
        """Get the cache directory path."""
        return self.cache_dir

    def list_cache_files(self) -> List[Path]:
        """List all entry files in the cache directory.

        Returns:
            List of entry file paths, empty if the directory cannot be read
        """
        if not self.cache_dir.exists():
            return []

        try:
            return sorted(self.cache_dir.glob("*.json"))
        except OSError as e:
            logger.error(f"Cannot list cache directory {self.cache_dir}: {e}")
            return []
