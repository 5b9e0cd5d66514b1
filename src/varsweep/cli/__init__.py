"""Command-line interface for varsweep.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar over constellation coordinates
- Per-glyph failure report with coordinate indices
- Verbose/quiet output modes
- Distinct exit codes for mismatches and fatal errors
"""

from varsweep.cli.app import cli, main

__all__ = ["cli", "main"]
