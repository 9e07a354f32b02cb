"""Human-readable rendering of cache durations, sizes and statistics."""

import math
from typing import Optional

from .config import DAY_MS, HOUR_MS, MINUTE_MS, SECOND_MS
from .models import CacheStats, now_ms

STATS_RULE = "─" * 40


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_ttl(ms: int) -> str:
    """
    Render a duration using the largest unit that fits.

    Examples:
        format_ttl(30000) -> "30s", format_ttl(5400000) -> "2h"
    """
    if ms < MINUTE_MS:
        return f"{_round_half_up(ms / SECOND_MS)}s"
    if ms < HOUR_MS:
        return f"{_round_half_up(ms / MINUTE_MS)}m"
    if ms < DAY_MS:
        return f"{_round_half_up(ms / HOUR_MS)}h"
    return f"{_round_half_up(ms / DAY_MS)}d"


def format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def format_cache_stats(stats: CacheStats, current_ms: Optional[int] = None) -> str:
    """
    Render cache statistics as a multi-line block.

    Args:
        stats: Statistics to render
        current_ms: Reference time for entry ages, defaults to now

    Returns:
        Newline-separated statistics
    """
    if current_ms is None:
        current_ms = now_ms()

    lines = [
        "Cache Statistics",
        STATS_RULE,
        f"Total Entries: {stats.total_entries}",
        f"Total Size: {format_bytes(stats.total_size)}",
        f"Hit Count: {stats.hit_count}",
        f"Miss Count: {stats.miss_count}",
        f"Hit Rate: {stats.hit_rate * 100:.1f}%",
    ]

    if stats.oldest_entry:
        lines.append(f"Oldest Entry: {format_ttl(current_ms - stats.oldest_entry)} ago")
    if stats.newest_entry:
        lines.append(f"Newest Entry: {format_ttl(current_ms - stats.newest_entry)} ago")

    return "\n".join(lines)
