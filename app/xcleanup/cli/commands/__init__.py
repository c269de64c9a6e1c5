"""CLI commands for xcleanup.

This package contains all subcommand implementations.
"""

from xcleanup.cli.commands import init, plan, run, status

__all__ = ["init", "plan", "run", "status"]
