"""CLI package for xcleanup.

This package contains the Typer application and all subcommands.
"""

from xcleanup.cli.main import app

__all__ = ["app"]
