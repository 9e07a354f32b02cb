"""Prune expired cache entries command for infra-cost."""

from typing import Optional

import typer

from .helpers import cache_dir_option, cache_type_option, console, get_cache_manager, run_async


def prune_cache(
    cache_type: Optional[str] = cache_type_option(),
    cache_dir: Optional[str] = cache_dir_option(),
):
    """Remove expired cache entries.

    Expired entries are otherwise only removed when they are read again.
    """
    try:
        cache_manager = get_cache_manager(cache_type, cache_dir)
        pruned = run_async(cache_manager.prune())
    except Exception as e:
        console.print(f"[red]Error pruning cache: {e}[/red]")
        raise typer.Exit(1)

    if pruned:
        console.print(f"[green]✓ Pruned {pruned} expired cache entries[/green]")
    else:
        console.print("[green]No expired cache entries found.[/green]")
