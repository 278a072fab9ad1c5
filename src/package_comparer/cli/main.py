"""
Main CLI entry point for Package Comparer.

This module provides the command-line interface for comparing the public
surface of two package versions.
"""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from package_comparer import __version__
from package_comparer.cli.commands import compare as compare_commands
from package_comparer.cli.commands import validate as validate_commands
from package_comparer.cli.context import ComparerContext
from package_comparer.utils.logging import configure_logging, get_logger

# Load environment variables from .env file
load_dotenv()

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="package-comparer")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
    envvar="PACKAGE_COMPARER_CONFIG",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Set console logging level (defaults to logging.level from config)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write logs to this file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    log_level: str | None,
    log_file: Path | None,
) -> None:
    """Package Comparer - gap analysis between two package versions.

    Compares exported types and members of two package snapshots and reports
    what was added, removed, modified or moved to another namespace.
    """
    configure_logging(level=log_level or "WARNING", log_file=str(log_file) if log_file else None)

    ctx.obj = ComparerContext(
        config_path=config,
        log_level=log_level,
        log_file=log_file,
    )

    logger.debug(
        "cli_initialized",
        config=str(config) if config else None,
        log_level=log_level,
    )


cli.add_command(compare_commands.compare)
cli.add_command(validate_commands.validate)


def main() -> int:
    """Main entry point for CLI."""
    try:
        exit_code = cli(standalone_mode=False)
        return exit_code if isinstance(exit_code, int) else 0
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except Exception as e:
        logger.error("unexpected_error", error=str(e), exc_info=True)
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
