"""Cache management commands for infra-cost.

This module provides commands to inspect and maintain the cost data cache:
status, listing, clearing, pruning expired entries and targeted invalidation.
"""

import typer

# Import all submodules first
from . import clear, helpers, invalidate, listing, prune, status

# Import command functions
from .clear import clear_cache
from .invalidate import invalidate_cache
from .listing import list_cache
from .prune import prune_cache
from .status import cache_status

# Create the main app instance
app = typer.Typer(help="Inspect and maintain the cost data cache.")

# Register commands with the app
app.command("status")(cache_status)
app.command("list")(list_cache)
app.command("clear")(clear_cache)
app.command("prune")(prune_cache)
app.command("invalidate")(invalidate_cache)

__all__ = ["app", "clear", "helpers", "invalidate", "listing", "prune", "status"]
