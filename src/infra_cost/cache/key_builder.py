"""Cache key generation for the cost cache.

Keys follow the pattern:
    {prefix}:{provider}:{account}:{profile}:{region}:{data_type}[:{start}:{end}]

Account- and profile-scoped invalidation relies on this layout: every entry
of account ``A`` contains the substring ``:A:``.
"""

import hashlib
import json
from typing import Any, Dict, Optional

from .errors import CacheKeyError
from .models import DateRange

SEPARATOR = ":"

# Provider assumed by callers written before multi-provider support
DEFAULT_PROVIDER = "aws"

# Account segment used before the real account id is known
ACCOUNT_PLACEHOLDER = "unknown"

# Trend window segment when the adapter chooses the window
DEFAULT_TREND_WINDOW = "default"

# Hex characters kept from parameter hashes
PARAMETER_HASH_LENGTH = 12


class CacheKeyBuilder:
    """Builds and parses colon-delimited cache keys."""

    def __init__(self, prefix: str):
        if not prefix:
            raise CacheKeyError("Cache key prefix cannot be empty")
        self.prefix = prefix

    def build_key(
        self,
        account: str,
        profile: str,
        region: str,
        data_type: str,
        provider: Optional[str] = None,
        date_range: Optional[DateRange] = None,
    ) -> str:
        """
        Build a cache key.

        Args:
            account: Account identifier, or ACCOUNT_PLACEHOLDER before it is known
            profile: Credentials profile name
            region: Cloud region
            data_type: Data-type tag, possibly embedding parameters
            provider: Cloud provider name, defaults to "aws"
            date_range: Optional reporting window appended to the key

        Returns:
            Formatted cache key string

        Raises:
            CacheKeyError: If a component is empty or contains the separator
        """
        components = [
            self.prefix,
            provider or DEFAULT_PROVIDER,
            self._validate_component("account", account),
            self._validate_component("profile", profile),
            self._validate_component("region", region),
            self._validate_component("data_type", data_type),
        ]

        if date_range is not None:
            components.append(date_range.start)
            components.append(date_range.end)

        return SEPARATOR.join(components)

    @staticmethod
    def parse_key(key: str) -> Dict[str, Optional[str]]:
        """
        Parse a cache key into its components.

        Args:
            key: Cache key to parse

        Returns:
            Dictionary with key components, None for missing ones
        """
        components = key.split(SEPARATOR)
        names = ("prefix", "provider", "account", "profile", "region", "data_type")

        result: Dict[str, Optional[str]] = {
            name: components[index] if len(components) > index else None
            for index, name in enumerate(names)
        }
        result["date_start"] = components[6] if len(components) > 6 else None
        result["date_end"] = components[7] if len(components) > 7 else None
        return result

    @staticmethod
    def _validate_component(name: str, value: str) -> str:
        if not value or not isinstance(value, str):
            raise CacheKeyError(f"Cache key component '{name}' cannot be empty")
        if SEPARATOR in value:
            raise CacheKeyError(f"Cache key component '{name}' cannot contain '{SEPARATOR}'")
        return value


def stable_serialize(value: Any) -> str:
    """Serialize a parameter object so that key order does not matter."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


def hash_parameters(value: Any) -> str:
    """Short, deterministic hash of a parameter object."""
    digest = hashlib.sha256(stable_serialize(value).encode("utf-8")).hexdigest()
    return digest[:PARAMETER_HASH_LENGTH]


def inventory_data_type(filters: Optional[Dict[str, Any]] = None) -> str:
    """Data-type tag for a resource inventory request."""
    if not filters:
        return "inventory-all"
    return f"inventory-{hash_parameters(filters)}"


def trend_data_type(months: Optional[int] = None) -> str:
    """
    Data-type tag for a cost trend analysis over ``months``.

    Without ``months`` the adapter picks its own window, which differs per
    provider, so that request gets a tag of its own.
    """
    if months is None:
        return f"trend-analysis-{DEFAULT_TREND_WINDOW}"
    return f"trend-analysis-{months}"
