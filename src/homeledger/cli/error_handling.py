"""CLI error handling helpers."""

import logging

import click

from homeledger.domain.errors import DomainError, PasswordRequired, StatementError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError | FileNotFoundError) -> None:
    """Render an error on stderr and exit with failure.

    Statement errors other than a password prompt are final for the file, so
    the user is pointed at choosing another one.
    """
    logger.debug("%s failed", ctx.command_path, exc_info=error)
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, StatementError) and not isinstance(error, PasswordRequired):
        click.echo("Check that this is a statement export from your bank, or choose another file.", err=True)
    ctx.exit(1)
