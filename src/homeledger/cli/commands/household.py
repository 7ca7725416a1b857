"""Household management commands."""

import click

from homeledger.cli.error_handling import handle_domain_error
from homeledger.domain.errors import DomainError
from homeledger.domain.household import HouseholdService


@click.group()
def household_group():
    """Manage households."""
    pass


@household_group.command("create")
@click.argument("name")
@click.pass_context
def create_household(ctx, name: str):
    """Create a new household."""
    service = HouseholdService(ctx.obj["db"])
    try:
        household_id = service.create_household(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created household '{name.strip()}' (ID: {household_id})")


@household_group.command("list")
@click.pass_context
def list_households(ctx):
    """List all households."""
    service = HouseholdService(ctx.obj["db"])
    households = service.list_households()
    if not households:
        click.echo("No households found. Create one with 'household create NAME'.")
        return

    click.echo(f"\n{'ID':<6} {'Name':<30} {'Created':<12}")
    click.echo("-" * 50)
    for h in households:
        click.echo(f"{h.id:<6} {h.name:<30} {h.created_at.date().isoformat():<12}")


def register_commands(cli):
    """Register household commands with main CLI."""
    cli.add_command(household_group, name="household")
