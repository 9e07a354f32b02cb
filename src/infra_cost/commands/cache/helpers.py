"""Shared utilities for cache management commands."""

import asyncio
import logging
from typing import Any, Coroutine, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from ...cache.config import load_cache_config
from ...cache.manager import CostCacheManager

# Shared console instance
console = Console()
logger = logging.getLogger(__name__)

T = TypeVar("T")


def cache_type_option() -> Any:
    return typer.Option(
        None,
        "--cache-type",
        help="Cache backend to use: file or memory (defaults to configuration)",
    )


def cache_dir_option() -> Any:
    return typer.Option(
        None,
        "--cache-dir",
        help="Directory of the file cache (defaults to ~/.infra-cost/cache)",
    )


def get_cache_manager(
    cache_type: Optional[str] = None, cache_dir: Optional[str] = None
) -> CostCacheManager:
    """
    Build a cache manager from configuration and command-line overrides.

    Args:
        cache_type: Backend type override
        cache_dir: Cache directory override

    Returns:
        CostCacheManager for the resolved configuration
    """
    config = load_cache_config(type=cache_type, cache_dir=cache_dir)
    logger.debug(f"Using cache configuration: {config.to_dict()}")
    return CostCacheManager(config)


def run_async(coroutine: Coroutine[Any, Any, T]) -> T:
    """Run a cache coroutine from a synchronous command."""
    return asyncio.run(coroutine)


def create_cache_table(title: Optional[str] = None) -> Table:
    """Create a rich table for displaying cache entries."""
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("Key", style="green", overflow="fold")
    table.add_column("Data Type", style="cyan")
    table.add_column("Account", style="magenta")
    table.add_column("Expires In", justify="right")
    return table
