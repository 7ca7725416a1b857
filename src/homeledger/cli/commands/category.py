"""Category and sub-category management commands."""

import click

from homeledger.cli.error_handling import handle_domain_error
from homeledger.cli.household_resolution import resolve_household_or_exit
from homeledger.domain.entities import TransactionType
from homeledger.domain.errors import DomainError
from homeledger.domain.household import HouseholdService

household_option = click.option("--household", help="Household name or ID (optional when only one exists)")


@click.group()
def category_group():
    """Manage budget categories."""
    pass


@category_group.command("list")
@household_option
@click.pass_context
def list_categories(ctx, household: str | None):
    """List categories with their sub-categories."""
    service = HouseholdService(ctx.obj["db"])
    household_id = resolve_household_or_exit(ctx, service, household)

    categories = service.list_categories(household_id)
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    sub_categories = service.list_sub_categories(household_id)
    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} [{cat.category_type.value}] (ID: {cat.id})")
        for sub in sub_categories:
            if sub.category_id == cat.id:
                click.echo(f"  {sub.name} (ID: {sub.id})")


@category_group.command("create")
@click.argument("name")
@household_option
@click.option(
    "--type",
    "category_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    help="Category type (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, household: str | None, category_type: str):
    """Create a new top-level category."""
    service = HouseholdService(ctx.obj["db"])
    household_id = resolve_household_or_exit(ctx, service, household)

    try:
        category_id = service.create_category(household_id, name, TransactionType(category_type.lower()))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created {category_type.lower()} category '{name}' (ID: {category_id})")


@click.group()
def subcategory_group():
    """Manage sub-categories."""
    pass


@subcategory_group.command("create")
@click.argument("name")
@click.option("--category", "category_name", required=True, help="Parent category name")
@household_option
@click.pass_context
def create_sub_category(ctx, name: str, category_name: str, household: str | None):
    """Create a sub-category under an existing category."""
    service = HouseholdService(ctx.obj["db"])
    household_id = resolve_household_or_exit(ctx, service, household)

    parent = service.get_category_by_name(household_id, category_name)
    if parent is None:
        click.echo(f"Error: Category '{category_name}' not found", err=True)
        ctx.exit(1)
        return

    try:
        sub_category_id = service.create_sub_category(parent.id, name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created sub-category '{name}' under '{parent.name}' (ID: {sub_category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
    cli.add_command(subcategory_group, name="subcategory")
