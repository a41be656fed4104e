"""CLI commands for provctl.

This package contains all subcommand implementations.
"""

from provctl.cli.commands import apply, cache, init, plan

__all__ = ["apply", "cache", "init", "plan"]
