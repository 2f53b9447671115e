"""Command-line interface for shapemorph.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Listing and inspecting the built-in shape presets
- Sampling morph frames between two presets
- Verbose/quiet output modes
- Detailed error reporting
"""

from shapemorph.cli.app import cli, main

__all__ = ["cli", "main"]
