"""Initialize default household categories."""

import click

from homeledger.cli.household_resolution import resolve_household_or_exit
from homeledger.domain.entities import TransactionType
from homeledger.domain.errors import DomainError
from homeledger.domain.household import HouseholdService

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE

# (category, type, sub-categories); sub-category names line up with the merchant rules
INITIAL_CATEGORIES = [
    ("Income", INCOME, ["Salary", "Business Income", "Rental Income", "Freelance", "Investments", "Other Income"]),
    ("EMI", EXPENSE, ["Home Loan EMI", "Car Loan EMI", "Education Loan", "Personal Loan"]),
    ("Insurance", EXPENSE, ["Health Insurance", "Life Insurance", "Vehicle Insurance"]),
    ("Savings", EXPENSE, ["General Savings", "Emergency Fund", "Investment/SIP", "Vacation Fund"]),
    ("Fixed", EXPENSE, ["Rent", "Internet", "Phone Bill", "Maid/Help", "Society Maintenance", "Subscriptions"]),
    (
        "Variable",
        EXPENSE,
        [
            "Groceries",
            "Electricity",
            "Water",
            "Fuel",
            "Food Ordering",
            "Dining Out",
            "Shopping",
            "Entertainment",
            "Personal Care",
            "Medical",
            "Transport",
            "Miscellaneous",
        ],
    ),
]


@click.command("init-categories")
@click.option("--household", help="Household name or ID (optional when only one exists)")
@click.pass_context
def init_categories(ctx, household: str | None):
    """Create the default category set for a household.

    Existing categories and sub-categories are left untouched.
    """
    service = HouseholdService(ctx.obj["db"])
    household_id = resolve_household_or_exit(ctx, service, household)

    existing_subs = {s.name.lower() for s in service.list_sub_categories(household_id)}
    created = 0
    errors = 0

    for category_name, category_type, sub_names in INITIAL_CATEGORIES:
        parent = service.get_category_by_name(household_id, category_name)
        try:
            if parent is None:
                category_id = service.create_category(household_id, category_name, category_type)
                created += 1
            else:
                category_id = parent.id
        except DomainError as e:
            click.echo(f"Warning: Could not create category '{category_name}': {e}", err=True)
            errors += 1
            continue

        for sub_name in sub_names:
            if sub_name.lower() in existing_subs:
                continue
            try:
                service.create_sub_category(category_id, sub_name)
                existing_subs.add(sub_name.lower())
                created += 1
            except DomainError as e:
                click.echo(f"Warning: Could not create sub-category '{sub_name}': {e}", err=True)
                errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} categories.")
    else:
        click.echo(f"Created {created} categories with {errors} errors.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
