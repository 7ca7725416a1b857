"""Main CLI entry point."""

import logging

import click

from homeledger import __version__
from homeledger.config import SettingsError, load_settings
from homeledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from homeledger.cli.commands import (
    category,
    household,
    import_cmd,
    init_categories,
    rules,
    transaction,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(__version__, prog_name="homeledger")
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides HOMELEDGER_DB_PATH environment variable)",
    envvar="HOMELEDGER_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log pipeline details to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Homeledger - household budget ledger.

    Import bank statements (PDF, CSV or Excel) from ICICI, Axis, HDFC, SBI,
    Kotak and other banks, review the suggested categories and duplicates,
    and record the transactions against a household's budget categories.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            ctx.obj["settings"] = load_settings()
        except SettingsError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        ctx.obj["db"] = db


# Register all commands
household.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
import_cmd.register_commands(cli)
transaction.register_commands(cli)
rules.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
