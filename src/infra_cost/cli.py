#!/usr/bin/env python3
"""
infra-cost - multi-cloud FinOps CLI

Command-line entry point. Cost reporting commands read provider data through
the cached provider layer; the ``cache`` group maintains that cache.
"""
from typing import Optional

import typer
from rich.console import Console

from . import __version__
from .commands import cache
from .utils.logging_config import setup_logging

app = typer.Typer(
    help="infra-cost - Multi-cloud FinOps CLI with cached provider data.",
    add_completion=True,
    no_args_is_help=True,
)
console = Console()

# Add subcommands
app.add_typer(cache.app, name="cache")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"infra-cost version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the application version and exit.",
    ),
):
    """Multi-cloud FinOps CLI."""
    setup_logging(verbose=verbose)


if __name__ == "__main__":
    app()
