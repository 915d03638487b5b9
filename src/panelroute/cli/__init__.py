"""Command-line interface for panelroute.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Outline, arc and offset inspection for single placements
- Sub-path and nearest-arc queries
- Contour generation and master sync with progress output
"""

from panelroute.cli.app import cli, main

__all__ = ["cli", "main"]
