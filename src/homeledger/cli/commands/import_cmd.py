"""Bank statement import command."""

import click

from homeledger.cli.error_handling import handle_domain_error
from homeledger.cli.household_resolution import resolve_household_or_exit
from homeledger.domain.candidates import select_all, summarize
from homeledger.domain.entities import ImportCandidate, StatementParseResult
from homeledger.domain.errors import DomainError, PasswordRequired
from homeledger.domain.statement_import import StatementImportService
from homeledger.utils.amount_parser import format_amount

MAX_PASSWORD_ATTEMPTS = 3


def print_preview(result: StatementParseResult, candidates: list[ImportCandidate]) -> None:
    """Print the review table for parsed candidates."""
    click.echo(f"\nDetected {result.bank_name} {result.file_type.value.upper()} statement")
    click.echo("-" * 112)
    click.echo(
        f"{'#':<4} {'Sel':<4} {'Date':<12} {'Dir':<7} {'Amount':>14}  {'Category':<22} {'Conf':<7} {'Narration':<36}"
    )
    click.echo("-" * 112)
    for c in candidates:
        txn = c.transaction
        marker = "[x]" if c.selected else "[ ]"
        category = c.match.sub_category_name or "-"
        if c.is_duplicate:
            category = f"{category} (dup)"
        click.echo(
            f"{c.index + 1:<4} {marker:<4} {txn.date.isoformat():<12} {txn.direction.value:<7} "
            f"{format_amount(txn.amount):>14}  {category[:22]:<22} {c.match.confidence.value:<7} "
            f"{txn.narration[:36]:<36}"
        )

    summary = summarize(candidates)
    click.echo("-" * 112)
    click.echo(
        f"{summary.total} transactions: {summary.selected} selected, "
        f"{summary.categorized} categorized, {summary.uncategorized} uncategorized, "
        f"{summary.duplicates} possible duplicates"
    )
    if result.skipped_rows:
        click.echo(f"Skipped {result.skipped_rows} unusable row(s):")
        for detail in result.skipped_details[:5]:
            click.echo(f"  {detail}")
        if result.skipped_rows > 5:
            click.echo(f"  ... and {result.skipped_rows - 5} more")


@click.command("import")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--household", help="Household name or ID (optional when only one exists)")
@click.option("--password", help="Password for an encrypted PDF (prompted for if needed)")
@click.option("--logged-by", envvar="HOMELEDGER_USER", default="cli", show_default=True, help="Who is recording the import")
@click.option("--include-duplicates", is_flag=True, help="Also import rows flagged as possible duplicates")
@click.option("--continue-on-error", is_flag=True, help="Keep importing rows after a failed row")
@click.option("--yes", "-y", is_flag=True, help="Import without asking for confirmation")
@click.pass_context
def import_statement(
    ctx,
    statement_file: str,
    household: str | None,
    password: str | None,
    logged_by: str,
    include_duplicates: bool,
    continue_on_error: bool,
    yes: bool,
):
    """Import transactions from a PDF, CSV or Excel bank statement."""
    db = ctx.obj["db"]
    service = StatementImportService(db, settings=ctx.obj.get("settings"))
    household_id = resolve_household_or_exit(ctx, service.household_service, household)

    result = None
    attempts = 0
    while result is None:
        try:
            result = service.parse_statement_file(statement_file, password)
        except PasswordRequired as e:
            attempts += 1
            click.echo(str(e), err=True)
            if attempts > MAX_PASSWORD_ATTEMPTS:
                ctx.exit(1)
            password = click.prompt("PDF password", hide_input=True)
        except (DomainError, FileNotFoundError) as e:
            handle_domain_error(ctx, e)
            return

    try:
        candidates = service.prepare_candidates(household_id, result.transactions)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if include_duplicates:
        select_all(candidates)

    print_preview(result, candidates)

    selected = sum(1 for c in candidates if c.selected)
    if selected == 0:
        click.echo("\nNothing selected to import.")
        return
    if not yes and not click.confirm(f"\nImport {selected} selected transaction(s)?", default=True):
        click.echo("Import cancelled.")
        return

    try:
        commit = service.commit_import(candidates, household_id, logged_by, stop_on_error=not continue_on_error)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if commit.success:
        outcome = commit.outcome
        click.echo(
            f"\nImported {commit.imported_count} transaction(s) "
            f"from {outcome.start_date.isoformat()} to {outcome.end_date.isoformat()}."
        )
        click.echo(
            f"View them with: homeledger list --from {outcome.start_date.isoformat()} "
            f"--to {outcome.end_date.isoformat()}"
        )
        return

    click.echo(f"\nImported {commit.imported_count} transaction(s) before failing.")
    click.echo(f"Error: {commit.error}", err=True)
    ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)
