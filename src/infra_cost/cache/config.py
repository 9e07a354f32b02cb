"""Cache configuration and TTL parsing."""

import logging
import os
import re
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional

from .errors import CacheConfigurationError
from .utils import DEFAULT_CACHE_DIR

logger = logging.getLogger(__name__)

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

DEFAULT_TTL_MS = 4 * HOUR_MS
DEFAULT_TTL_STRING = "4h"
DEFAULT_MAX_ENTRIES = 1000
DEFAULT_PREFIX = "infra-cost"

VALID_CACHE_TYPES = ("file", "memory", "redis")

TTL_PATTERN = re.compile(r"^(\d+)([smhd])$")
TTL_UNITS_MS = {"s": SECOND_MS, "m": MINUTE_MS, "h": HOUR_MS, "d": DAY_MS}

ENV_PREFIX = "INFRA_COST_CACHE_"


def parse_ttl(ttl: str) -> int:
    """
    Parse a TTL string such as ``30s``, ``5m``, ``2h`` or ``1d``.

    Args:
        ttl: TTL string with a single unit suffix

    Returns:
        TTL in milliseconds, or the 4 hour default when the string is not understood
    """
    match = TTL_PATTERN.match(ttl.strip()) if isinstance(ttl, str) else None
    if not match:
        logger.debug(f"Unparsable TTL {ttl!r}, using default of {DEFAULT_TTL_STRING}")
        return DEFAULT_TTL_MS

    value, unit = match.groups()
    return int(value) * TTL_UNITS_MS[unit]


def is_valid_ttl(ttl: str) -> bool:
    return isinstance(ttl, str) and TTL_PATTERN.match(ttl) is not None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {value}")
        return default


@dataclass
class CacheConfig:
    """
    Configuration for a cost cache manager.

    ``ttl`` is the default time-to-live in milliseconds for entries written
    without an explicit TTL. ``max_entries`` bounds the memory backend only.
    ``redis_url`` is accepted for compatibility; redis selects the file
    backend.
    """

    type: str = "file"
    ttl: int = DEFAULT_TTL_MS
    max_entries: int = DEFAULT_MAX_ENTRIES
    cache_dir: str = str(DEFAULT_CACHE_DIR)
    prefix: str = DEFAULT_PREFIX
    redis_url: Optional[str] = None
    enabled: bool = True

    def __post_init__(self):
        if not isinstance(self.type or "file", str):
            raise CacheConfigurationError(f"Cache type must be a string, got {self.type!r}")
        self.type = (self.type or "file").lower()
        if self.type not in VALID_CACHE_TYPES:
            logger.warning(f"Unknown cache type '{self.type}', the file backend will be used")

        if not isinstance(self.ttl, int) or self.ttl <= 0:
            raise CacheConfigurationError(f"Cache TTL must be a positive integer, got {self.ttl!r}")

        if isinstance(self.max_entries, bool) or not isinstance(self.max_entries, int):
            raise CacheConfigurationError(
                f"max_entries must be an integer, got {self.max_entries!r}"
            )
        if self.max_entries < 1:
            raise CacheConfigurationError("max_entries must be at least 1")

        if not self.prefix:
            raise CacheConfigurationError("Cache key prefix cannot be empty")

    def merged_with(self, **overrides: Any) -> "CacheConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {name: value for name, value in overrides.items() if value is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, settings: Dict[str, Any]) -> "CacheConfig":
        """
        Build a config from the ``cache`` section of the config file.

        The file uses the user-facing names: ``ttl`` as a duration string and
        ``directory`` for the cache location. Invalid values are reported as
        warnings and replaced by their defaults.
        """
        config = cls()
        if not settings:
            return config

        invalid = _find_invalid_settings(settings)
        for name, error in invalid.items():
            logger.warning(f"Ignoring cache setting '{name}' from configuration file: {error}")
        settings = {name: value for name, value in settings.items() if name not in invalid}

        ttl = settings.get("ttl")
        return config.merged_with(
            type=settings.get("type"),
            ttl=parse_ttl(str(ttl)) if ttl is not None else None,
            max_entries=settings.get("max_entries"),
            cache_dir=settings.get("directory"),
            prefix=settings.get("prefix"),
            redis_url=settings.get("redis_url"),
            enabled=settings.get("enabled"),
        )

    @classmethod
    def from_environment(cls, base: Optional["CacheConfig"] = None) -> "CacheConfig":
        """
        Apply ``INFRA_COST_CACHE_*`` environment variables on top of ``base``.

        Returns:
            CacheConfig with environment overrides applied
        """
        config = base or cls()
        ttl = os.getenv(f"{ENV_PREFIX}TTL")

        config = config.merged_with(
            type=os.getenv(f"{ENV_PREFIX}TYPE"),
            ttl=parse_ttl(ttl) if ttl else None,
            cache_dir=os.getenv(f"{ENV_PREFIX}DIR"),
            redis_url=os.getenv(f"{ENV_PREFIX}REDIS_URL"),
            max_entries=_env_int(f"{ENV_PREFIX}MAX_ENTRIES", config.max_entries),
            enabled=_env_bool(f"{ENV_PREFIX}ENABLED", config.enabled),
        )
        logger.debug("Loaded cache configuration from environment variables")
        return config

    @classmethod
    def from_config_file(cls, config_path: Optional[str] = None) -> "CacheConfig":
        """
        Load the ``cache`` section of the YAML config file.

        Args:
            config_path: Optional path to config file. If None, uses default location.
        """
        from ..utils.config import Config

        config = Config(config_path)
        return cls.from_dict(config.get_cache_config())


def load_cache_config(config_path: Optional[str] = None, **overrides: Any) -> CacheConfig:
    """
    Resolve the effective cache configuration.

    Precedence, lowest first: defaults, config file, environment, explicit
    overrides (typically CLI options).
    """
    config = CacheConfig.from_config_file(config_path)
    config = CacheConfig.from_environment(config)
    return config.merged_with(**overrides)


def _find_invalid_settings(settings: Dict[str, Any]) -> Dict[str, str]:
    """Map each invalid setting of the ``cache`` section to its error."""
    errors: Dict[str, str] = {}

    ttl = settings.get("ttl")
    if ttl is not None and not is_valid_ttl(str(ttl)):
        errors["ttl"] = 'Cache TTL must be in format like "4h", "30m", "1d"'

    cache_type = settings.get("type")
    if cache_type is not None and str(cache_type).lower() not in VALID_CACHE_TYPES:
        errors["type"] = f"Cache type must be one of: {', '.join(VALID_CACHE_TYPES)}"
    elif str(cache_type).lower() == "redis" and not settings.get("redis_url"):
        errors["redis_url"] = 'Redis URL is required when cache type is "redis"'

    max_entries = settings.get("max_entries")
    if max_entries is not None and (
        isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries < 1
    ):
        errors["max_entries"] = "Cache max_entries must be a positive integer"

    enabled = settings.get("enabled")
    if enabled is not None and not isinstance(enabled, bool):
        errors["enabled"] = "Cache enabled must be true or false"

    for name in ("directory", "prefix"):
        value = settings.get(name)
        if value is not None and (not isinstance(value, str) or not value):
            errors[name] = f"Cache {name} must be a non-empty string"

    return errors


def validate_cache_settings(settings: Dict[str, Any]) -> List[str]:
    """
    Validate the ``cache`` section of the config file.

    Returns:
        List of human-readable errors, empty when the settings are valid
    """
    return list(_find_invalid_settings(settings).values())
