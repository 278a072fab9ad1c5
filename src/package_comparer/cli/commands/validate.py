"""
Snapshot validation command.
"""

from pathlib import Path

import click

from package_comparer.cli.context import ComparerContext
from package_comparer.cli.decorators import handle_errors, pass_context
from package_comparer.cli.utils import echo_success, resolve_snapshot
from package_comparer.comparison.validation import validate_snapshot


@click.command(name="validate")
@click.argument("snapshot")
@click.option(
    "--snapshot-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Root directory for PackageId/Version references (defaults to paths.snapshot_dir)",
)
@pass_context
@handle_errors
def validate(ctx: ComparerContext, snapshot: str, snapshot_dir: Path | None) -> None:
    """Check that a snapshot loads and is fit for comparison.

    SNAPSHOT is a snapshot file or a PackageId/Version reference.
    """
    package = resolve_snapshot(snapshot, ctx.registry(snapshot_dir))
    validate_snapshot(package, snapshot)

    echo_success(
        f"{package.display_name}: {len(package.types)} types, {package.member_count} members"
    )
