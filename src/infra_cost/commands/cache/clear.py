"""Clear cache command for infra-cost."""

from typing import Optional

import typer

from ...cache.formatting import format_bytes
from .helpers import cache_dir_option, cache_type_option, console, get_cache_manager, run_async


def clear_cache(
    force: bool = typer.Option(False, "--force", "-f", help="Force clear without confirmation"),
    cache_type: Optional[str] = cache_type_option(),
    cache_dir: Optional[str] = cache_dir_option(),
):
    """Clear all cached cost data.

    Removes every stored entry so the next command fetches fresh data from
    the cloud providers. To refresh a single account use
    ``infra-cost cache invalidate --account``.
    """
    try:
        cache_manager = get_cache_manager(cache_type, cache_dir)
        stats = run_async(cache_manager.get_stats())
    except Exception as e:
        console.print(f"[red]Error clearing cache: {e}[/red]")
        raise typer.Exit(1)

    if stats.total_entries == 0:
        console.print("[green]Cache is already empty.[/green]")
        return

    console.print(
        f"[yellow]About to clear {stats.total_entries} cache entries "
        f"({format_bytes(stats.total_size)})[/yellow]"
    )

    # Ask for confirmation unless --force is used
    if not force:
        confirm = typer.confirm("Are you sure you want to clear all cache entries?")
        if not confirm:
            console.print("[blue]Cache clear cancelled.[/blue]")
            return

    try:
        run_async(cache_manager.clear())
    except Exception as e:
        console.print(f"[red]Error clearing cache: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Cleared {stats.total_entries} cache entries[/green]")
