"""Ledger listing command."""

import click

from homeledger.cli.error_handling import handle_domain_error
from homeledger.cli.household_resolution import resolve_household_or_exit
from homeledger.domain.errors import DomainError
from homeledger.domain.household import HouseholdService
from homeledger.domain.ledger import LedgerService
from homeledger.utils.amount_parser import format_amount
from homeledger.utils.date_parser import parse_date


@click.command("list")
@click.option("--household", help="Household name or ID (optional when only one exists)")
@click.option("--from", "start_date", help="Start date (YYYY-MM-DD or 'last month', etc.)")
@click.option("--to", "end_date", help="End date (YYYY-MM-DD)")
@click.pass_context
def list_transactions(ctx, household: str | None, start_date: str | None, end_date: str | None):
    """List ledger transactions, optionally within a date range."""
    db = ctx.obj["db"]
    household_service = HouseholdService(db)
    ledger = LedgerService(db)
    household_id = resolve_household_or_exit(ctx, household_service, household)

    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    try:
        transactions = ledger.list_transactions(household_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return

    reference = household_service.get_reference_data(household_id)
    sub_names = {}
    for sub in reference.sub_categories:
        parent = reference.category_map.get(sub.category_id)
        sub_names[sub.id] = f"{parent.name} > {sub.name}" if parent else sub.name

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>14}  {'Category':<30} {'Narration':<36}")
    click.echo("-" * 110)
    for txn in transactions:
        category = sub_names.get(txn.sub_category_id, "Uncategorized") if txn.sub_category_id else "Uncategorized"
        click.echo(
            f"{txn.id:<6} {txn.transaction_date.isoformat():<12} {txn.transaction_type.value:<8} "
            f"{format_amount(txn.amount):>14}  {category[:30]:<30} {(txn.narration or '')[:36]:<36}"
        )


def register_commands(cli):
    """Register list command with main CLI."""
    cli.add_command(list_transactions)
