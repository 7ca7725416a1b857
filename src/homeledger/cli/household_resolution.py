"""CLI helpers for household resolution."""

from __future__ import annotations

import click

from homeledger.domain.errors import NotFoundError
from homeledger.domain.household import HouseholdService


def resolve_household(service: HouseholdService, household: str | int) -> int:
    """Resolve a household given by ID or name.

    Raises:
        NotFoundError: If no household matches
    """
    if isinstance(household, int) or str(household).isdigit():
        household_id = int(household)
        service.require_household(household_id)
        return household_id

    for candidate in service.list_households():
        if candidate.name.lower() == str(household).strip().lower():
            return candidate.id
    raise NotFoundError(f"Household '{household}' not found")


def resolve_household_or_exit(ctx: click.Context, service: HouseholdService, household: str | int | None) -> int:
    """Resolve household name or ID, or exit with a CLI error.

    With no household given, the only household is used when there is
    exactly one.
    """
    try:
        if household is None:
            households = service.list_households()
            if len(households) == 1:
                return households[0].id
            if not households:
                raise NotFoundError("No households exist. Create one with 'homeledger household create NAME'.")
            raise NotFoundError("Several households exist; choose one with --household.")
        return resolve_household(service, household)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
