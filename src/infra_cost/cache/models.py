"""Data models for the cost data cache."""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

from .errors import CacheSerializationError

T = TypeVar("T")

REQUIRED_ENTRY_FIELDS = ("key", "data", "timestamp", "ttl", "account", "profile", "region")


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(round(time.time() * 1000))


@dataclass(frozen=True)
class DateRange:
    """Inclusive reporting window appended to date-scoped cache keys."""

    start: str
    end: str

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass
class CacheEntry(Generic[T]):
    """
    Represents a cached payload with its expiry and scoping metadata.

    The ``key`` field is the logical cache key. Backends that map keys to
    storage locations through a hash keep it inside the entry so that a
    collision can be detected on read.
    """

    key: str
    data: T
    timestamp: int  # Creation time in epoch milliseconds
    ttl: int  # Time-to-live in milliseconds
    account: str
    profile: str
    region: str
    metadata: Optional[Dict[str, Any]] = None

    @property
    def expires_at(self) -> int:
        """Epoch milliseconds after which the entry is expired."""
        return self.timestamp + self.ttl

    def is_expired(self, current_ms: Optional[int] = None) -> bool:
        """Check if the entry is past its liveness window.

        Args:
            current_ms: Optional current time in epoch milliseconds.

        Returns:
            True once ``now > timestamp + ttl``.
        """
        if current_ms is None:
            current_ms = now_ms()
        return current_ms > self.expires_at

    def remaining_ms(self, current_ms: Optional[int] = None) -> int:
        """Milliseconds until expiry, floored at zero."""
        if current_ms is None:
            current_ms = now_ms()
        return max(self.expires_at - current_ms, 0)

    def age_ms(self, current_ms: Optional[int] = None) -> int:
        """Milliseconds since the entry was written."""
        if current_ms is None:
            current_ms = now_ms()
        return current_ms - self.timestamp

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "data": self.data,
            "timestamp": self.timestamp,
            "ttl": self.ttl,
            "account": self.account,
            "profile": self.profile,
            "region": self.region,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "CacheEntry[Any]":
        """Rebuild an entry from its serialized form.

        Raises:
            CacheSerializationError: If the payload is not a valid entry
        """
        if not isinstance(payload, dict):
            raise CacheSerializationError(
                f"Cache entry must be an object, got {type(payload).__name__}"
            )

        missing = [name for name in REQUIRED_ENTRY_FIELDS if name not in payload]
        if missing:
            raise CacheSerializationError(f"Cache entry missing fields: {', '.join(missing)}")

        try:
            timestamp = int(payload["timestamp"])
            ttl = int(payload["ttl"])
        except (TypeError, ValueError) as e:
            raise CacheSerializationError("Cache entry has invalid timestamp or ttl", cause=e)

        metadata = payload.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise CacheSerializationError("Cache entry metadata must be an object")

        return cls(
            key=str(payload["key"]),
            data=payload["data"],
            timestamp=timestamp,
            ttl=ttl,
            account=str(payload["account"]),
            profile=str(payload["profile"]),
            region=str(payload["region"]),
            metadata=metadata,
        )


@dataclass
class CacheStats:
    """Aggregate, read-only view of a backend's contents and counters."""

    total_entries: int = 0
    total_size: int = 0  # Bytes
    hit_count: int = 0
    miss_count: int = 0
    oldest_entry: Optional[int] = None
    newest_entry: Optional[int] = None
    backend_type: str = field(default="unknown", compare=False)

    @property
    def hit_rate(self) -> float:
        """Share of lookups that were hits, 0.0 before any lookup."""
        lookups = self.hit_count + self.miss_count
        if lookups == 0:
            return 0.0
        return self.hit_count / lookups

    def record_timestamp(self, timestamp: int) -> None:
        """Fold an entry timestamp into the oldest/newest bounds."""
        if self.oldest_entry is None or timestamp < self.oldest_entry:
            self.oldest_entry = timestamp
        if self.newest_entry is None or timestamp > self.newest_entry:
            self.newest_entry = timestamp

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_entries": self.total_entries,
            "total_size": self.total_size,
            "hit_count": self.hit_count,
            "miss_count": self.miss_count,
            "hit_rate": self.hit_rate,
            "oldest_entry": self.oldest_entry,
            "newest_entry": self.newest_entry,
            "backend_type": self.backend_type,
        }
