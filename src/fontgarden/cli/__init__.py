"""Command-line interface for fontgarden.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- new, import and export commands
- Quiet output mode and optional JSON log file
- Errors reported with the full set/source/layer path
"""

from fontgarden.cli.app import app, cli

__all__ = ["app", "cli"]
