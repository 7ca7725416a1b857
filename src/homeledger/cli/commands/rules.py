"""Merchant rule listing command."""

import click

from homeledger.domain.merchant_rules import DEFAULT_MERCHANT_RULES


@click.command("rules")
@click.option("--keywords/--no-keywords", default=False, help="Show every keyword of each rule")
def show_rules(keywords: bool):
    """Show the merchant rules used to suggest categories, in priority order."""
    click.echo(f"\n{'#':<4} {'Sub-category':<22} {'Type':<8} {'Confidence':<11} Keywords")
    click.echo("-" * 90)
    for position, rule in enumerate(DEFAULT_MERCHANT_RULES, start=1):
        shown = rule.keywords if keywords else rule.keywords[:4]
        more = "" if keywords or len(rule.keywords) <= 4 else f", ... (+{len(rule.keywords) - 4})"
        click.echo(
            f"{position:<4} {rule.sub_category:<22} {rule.transaction_type.value:<8} "
            f"{rule.confidence.value:<11} {', '.join(shown)}{more}"
        )


def register_commands(cli):
    """Register rules command with main CLI."""
    cli.add_command(show_rules)
