"""
Decorators for CLI commands.

This module provides decorators for error handling and context passing.
"""

import functools
from collections.abc import Callable

import click

from package_comparer.cli.context import ComparerContext
from package_comparer.exceptions import (
    ConfigurationError,
    ProviderNotFoundError,
    SnapshotLoadError,
    SnapshotValidationError,
)
from package_comparer.utils.logging import get_logger, log_error

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2
EXIT_SNAPSHOT = 3
EXIT_PROVIDER_NOT_FOUND = 4
EXIT_BREAKING_CHANGES = 6


def pass_context(f: Callable) -> Callable:
    """
    Decorator to pass ComparerContext to command function.

    Usage:
        @click.command()
        @pass_context
        def my_command(ctx: ComparerContext):
            print(ctx.config)
    """

    @click.pass_context
    @functools.wraps(f)
    def wrapper(click_ctx: click.Context, *args, **kwargs):
        comparer_ctx: ComparerContext = click_ctx.obj
        return f(comparer_ctx, *args, **kwargs)

    return wrapper


def handle_errors(f: Callable) -> Callable:
    """
    Decorator to handle common errors in CLI commands.

    Exit codes:
        0: Success
        1: Unexpected error
        2: Configuration error
        3: Snapshot load or validation error
        4: No snapshot provider for a package
        6: Breaking changes found (with --fail-on-breaking)
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)

        except click.exceptions.Exit:
            # Intentional exits
            raise

        except ConfigurationError as e:
            logger.error("configuration_error", error=str(e))
            click.echo(f"Configuration Error: {e}", err=True)
            click.echo(
                "\nPlease check your configuration file and environment variables.",
                err=True,
            )
            raise click.exceptions.Exit(EXIT_CONFIGURATION) from e

        except (SnapshotLoadError, SnapshotValidationError) as e:
            logger.error("snapshot_error", error=str(e))
            click.echo(f"Snapshot Error: {e}", err=True)
            raise click.exceptions.Exit(EXIT_SNAPSHOT) from e

        except ProviderNotFoundError as e:
            logger.error("provider_not_found", package_id=e.package_id)
            click.echo(f"Provider Error: {e}", err=True)
            raise click.exceptions.Exit(EXIT_PROVIDER_NOT_FOUND) from e

        except Exception as e:
            log_error(logger, e, context=f.__name__)
            click.echo(f"Unexpected Error: {e}", err=True)
            click.echo(
                "\nAn unexpected error occurred. Please check the logs for details.",
                err=True,
            )
            raise click.exceptions.Exit(EXIT_UNEXPECTED) from e

    return wrapper
