"""Invalidate cache entries command for infra-cost."""

from typing import Optional

import typer

from ...cache.manager import CostCacheManager
from .helpers import cache_dir_option, cache_type_option, console, get_cache_manager, run_async


async def _invalidate(
    cache_manager: CostCacheManager,
    account: Optional[str],
    profile: Optional[str],
    key: Optional[str],
    pattern: Optional[str],
) -> int:
    removed = 0
    if key:
        removed += int(await cache_manager.invalidate(key))
    if account:
        removed += await cache_manager.invalidate_account(account)
    if profile:
        removed += await cache_manager.invalidate_profile(profile)
    if pattern:
        removed += await cache_manager.invalidate_pattern(pattern)
    return removed


def invalidate_cache(
    account: Optional[str] = typer.Option(
        None, "--account", "-a", help="Invalidate every entry of this account id"
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Invalidate every entry fetched with this profile"
    ),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Invalidate a single cache key"),
    pattern: Optional[str] = typer.Option(
        None, "--pattern", help="Invalidate every key containing this text"
    ),
    cache_type: Optional[str] = cache_type_option(),
    cache_dir: Optional[str] = cache_dir_option(),
):
    """Invalidate selected cache entries.

    Selectors can be combined. Account and profile selectors match the
    corresponding segment of the cache key.
    """
    if not any((account, profile, key, pattern)):
        console.print(
            "[red]Error: Specify at least one of --account, --profile, --key or --pattern[/red]"
        )
        raise typer.Exit(1)

    try:
        cache_manager = get_cache_manager(cache_type, cache_dir)
        removed = run_async(_invalidate(cache_manager, account, profile, key, pattern))
    except Exception as e:
        console.print(f"[red]Error invalidating cache entries: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Invalidated {removed} cache entries[/green]")
