"""
Utility functions for CLI commands.

This module provides message helpers and snapshot resolution for commands.
"""

from pathlib import Path

import click
from rich.console import Console

from package_comparer.exceptions import SnapshotLoadError
from package_comparer.snapshot.models import PackageSnapshot
from package_comparer.snapshot.persistence import load_snapshot
from package_comparer.snapshot.providers import SnapshotProviderRegistry, parse_package_reference

console = Console()


def echo_success(message: str) -> None:
    """Print success message in green."""
    click.secho(f"✓ {message}", fg="green")


def echo_warning(message: str) -> None:
    """Print warning message in yellow."""
    click.secho(f"⚠ {message}", fg="yellow")


def resolve_snapshot(reference: str, registry: SnapshotProviderRegistry) -> PackageSnapshot:
    """
    Load a snapshot from a file path or an ``Id/Version`` reference.

    Args:
        reference: Snapshot file path, or package reference such as ``Acme.Core/2.1.0``
        registry: Registry used for package references

    Returns:
        Loaded snapshot

    Raises:
        SnapshotLoadError: If the reference is neither a file nor a package reference
    """
    path = Path(reference)
    if path.is_file():
        return load_snapshot(path)

    try:
        package_id, version = parse_package_reference(reference)
    except ValueError as e:
        raise SnapshotLoadError(
            f"'{reference}' is neither a snapshot file nor a PackageId/Version reference"
        ) from e

    return registry.resolve(package_id, version)
