"""Command-line interface for lookalike.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar while characters are grouped
- Verbose/quiet output modes
- SVG and JSON diagnostic dumps
- Detailed error reporting
"""

from lookalike.cli.app import cli, main

__all__ = ["cli", "main"]
