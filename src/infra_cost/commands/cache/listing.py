"""List cache entries command for infra-cost."""

from typing import List, Optional

import typer

from ...cache.formatting import format_ttl
from ...cache.key_builder import CacheKeyBuilder
from ...cache.manager import CostCacheManager
from ...cache.models import CacheEntry
from .helpers import (
    cache_dir_option,
    cache_type_option,
    console,
    create_cache_table,
    get_cache_manager,
    run_async,
)


async def _load_live_entries(
    cache_manager: CostCacheManager, pattern: Optional[str]
) -> List[CacheEntry]:
    entries = []
    for key in await cache_manager.get_keys(pattern):
        entry = await cache_manager.get_entry(key)
        if entry is not None:
            entries.append(entry)
    return entries


def list_cache(
    pattern: Optional[str] = typer.Option(
        None, "--pattern", help="Only list keys containing this text"
    ),
    cache_type: Optional[str] = cache_type_option(),
    cache_dir: Optional[str] = cache_dir_option(),
):
    """List live cache entries with their remaining lifetime.

    Expired entries found while listing are removed.
    """
    try:
        cache_manager = get_cache_manager(cache_type, cache_dir)
        entries = run_async(_load_live_entries(cache_manager, pattern))
    except Exception as e:
        console.print(f"[red]Error listing cache entries: {e}[/red]")
        raise typer.Exit(1)

    if not entries:
        console.print("[yellow]No cache entries found.[/yellow]")
        return

    table = create_cache_table()
    for entry in sorted(entries, key=lambda item: item.key):
        data_type = (entry.metadata or {}).get("data_type") or CacheKeyBuilder.parse_key(
            entry.key
        ).get("data_type")
        table.add_row(entry.key, data_type or "-", entry.account, format_ttl(entry.remaining_ms()))

    console.print(table)
    console.print(f"\nTotal: {len(entries)} cache entries")
