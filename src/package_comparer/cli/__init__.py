"""Command-line interface for Package Comparer."""

from package_comparer.cli.main import cli, main

__all__ = ["cli", "main"]
