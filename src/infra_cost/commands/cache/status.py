"""Cache status command for infra-cost."""

from typing import Optional

import typer

from ...cache.formatting import format_cache_stats, format_ttl
from ...cache.manager import CostCacheManager
from .helpers import cache_dir_option, cache_type_option, console, get_cache_manager, run_async


def _display_configuration(cache_manager: CostCacheManager, healthy: bool) -> None:
    """Display backend configuration and health."""
    config = cache_manager.get_config()
    backend = cache_manager.backend

    console.print(f"[green]Cache Enabled:[/green] {'Yes' if config.enabled else 'No'}")
    console.print(f"[green]Backend Type:[/green] {backend.backend_type}")
    if backend.backend_type == "file":
        console.print(f"[green]Cache Directory:[/green] {backend.cache_dir}")
    elif backend.backend_type == "memory":
        console.print(f"[green]Max Entries:[/green] {config.max_entries}")
    console.print(f"[green]Default TTL:[/green] {format_ttl(config.ttl)}")

    if healthy:
        console.print("[green]Health:[/green] OK")
    else:
        console.print("[red]Health:[/red] Cache storage is not writable")


def cache_status(
    cache_type: Optional[str] = cache_type_option(),
    cache_dir: Optional[str] = cache_dir_option(),
):
    """Display cache configuration and statistics.

    Shows the active backend, its location and health, and the number and
    size of stored entries.
    """
    try:
        cache_manager = get_cache_manager(cache_type, cache_dir)

        async def collect():
            return await cache_manager.backend.health_check(), await cache_manager.get_stats()

        healthy, stats = run_async(collect())
    except Exception as e:
        console.print(f"[red]Error getting cache status: {e}[/red]")
        raise typer.Exit(1)

    console.print("[bold blue]Cache Status[/bold blue]\n")
    _display_configuration(cache_manager, healthy)
    console.print()
    console.print(format_cache_stats(stats), markup=False, highlight=False)

    if stats.total_entries == 0:
        console.print("\n[yellow]No cache entries found.[/yellow]")
