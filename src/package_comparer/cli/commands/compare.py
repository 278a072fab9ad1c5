"""
Compare command.

This module provides the command that compares two package snapshots and
renders the gap analysis report.
"""

from pathlib import Path

import click

from package_comparer.cli.context import ComparerContext
from package_comparer.cli.decorators import EXIT_BREAKING_CHANGES, handle_errors, pass_context
from package_comparer.cli.utils import console, echo_success, echo_warning, resolve_snapshot
from package_comparer.comparison import PackageComparator
from package_comparer.reporting import (
    REPORT_FORMATS,
    display_comparison_summary,
    generate_report,
    save_report,
)
from package_comparer.utils.logging import get_logger

logger = get_logger(__name__)


@click.command(name="compare")
@click.argument("package1")
@click.argument("package2")
@click.option(
    "--format",
    "-f",
    "report_format",
    type=click.Choice(REPORT_FORMATS, case_sensitive=False),
    default=None,
    help="Report format (defaults to report.format from config)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write the report to a file instead of stdout",
)
@click.option("--verbose", "-v", is_flag=True, help="Include per-member details")
@click.option(
    "--fail-on-breaking",
    is_flag=True,
    help=f"Exit with code {EXIT_BREAKING_CHANGES} when breaking changes are found",
)
@click.option(
    "--snapshot-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Root directory for PackageId/Version references (defaults to paths.snapshot_dir)",
)
@pass_context
@handle_errors
def compare(
    ctx: ComparerContext,
    package1: str,
    package2: str,
    report_format: str | None,
    output: Path | None,
    verbose: bool,
    fail_on_breaking: bool,
    snapshot_dir: Path | None,
) -> None:
    """Compare the public surface of two package versions.

    PACKAGE1 is the older version and PACKAGE2 the newer one. Each is either
    a snapshot file (JSON or YAML) or a PackageId/Version reference looked up
    under the snapshot directory.

    Examples:

        # Compare two snapshot files
        package-comparer compare old.json new.json

        # Compare by reference, Markdown report to a file
        package-comparer compare Acme.Core/1.0.0 Acme.Core/2.0.0 -f markdown -o report.md

        # Gate a release pipeline
        package-comparer compare Acme.Core/1.0.0 Acme.Core/2.0.0 --fail-on-breaking
    """
    config = ctx.config
    registry = ctx.registry(snapshot_dir)

    snapshot1 = resolve_snapshot(package1, registry)
    snapshot2 = resolve_snapshot(package2, registry)

    result = PackageComparator(config).compare(snapshot1, snapshot2)

    fmt = (report_format or config.report.format).lower()
    verbose = verbose or config.report.verbose

    if output:
        save_report(result, output, fmt, verbose)
        display_comparison_summary(result, console)
        echo_success(f"Report written to {output}")
    else:
        click.echo(generate_report(result, fmt, verbose))

    if result.has_breaking_changes:
        logger.info(
            "breaking_changes_found",
            package1=result.package1_name,
            package2=result.package2_name,
        )
        if fail_on_breaking:
            echo_warning("Breaking changes detected")
            raise click.exceptions.Exit(EXIT_BREAKING_CHANGES)
