"""Reconciliation rules commands."""

import json
from typing import Any, Optional

import click

from rapprochement.cli.error_handling import handle_domain_error
from rapprochement.domain.errors import DomainError
from rapprochement.domain.rules import ReconciliationRules


def rules_options(func):
    """Add the rule override options shared by rules-related commands."""
    options = [
        click.option(
            "--rules",
            "rules_file",
            type=click.Path(exists=True, dir_okay=False),
            help="JSON file with reconciliation rules",
        ),
        click.option("--amount-tolerance", type=float, help="Amount tolerance for exact matches"),
        click.option("--date-tolerance-days", type=int, help="Date window for exact matches"),
        click.option("--fuzzy-date-tolerance-days", type=int, help="Date window for strong fuzzy matches"),
        click.option("--weak-date-tolerance-days", type=int, help="Date window for weak fuzzy matches"),
        click.option("--label-similarity-threshold", type=float, help="Label similarity for exact matches (0-1)"),
        click.option("--fuzzy-label-threshold", type=float, help="Label similarity for strong fuzzy matches (0-1)"),
        click.option("--weak-label-threshold", type=float, help="Label similarity for weak fuzzy matches (0-1)"),
        click.option(
            "--group-matching/--no-group-matching",
            "enable_group_matching",
            default=None,
            help="Allow one bank line to match several accounting entries",
        ),
        click.option("--max-group-size", type=int, help="Largest group for group matching (2-10)"),
        click.option(
            "--ai-assistance/--no-ai-assistance",
            "enable_ai_assistance",
            default=None,
            help="Enable the AI-assisted matching tier",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_rules(rules_file: Optional[str], **overrides: Any) -> ReconciliationRules:
    """Load rules from a file (or defaults) and apply command-line overrides.

    Raises:
        ValidationError: If the resulting rules are malformed
    """
    rules = (
        ReconciliationRules.from_json_file(rules_file)
        if rules_file
        else ReconciliationRules()
    )
    return rules.with_overrides(**overrides)


@click.group("rules")
def rules_group():
    """Inspect reconciliation rules."""
    pass


@rules_group.command("show")
@rules_options
@click.pass_context
def show_rules(ctx, rules_file: Optional[str], **overrides: Any):
    """Validate rules and print them as JSON."""
    try:
        rules = build_rules(rules_file, **overrides)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(json.dumps(rules.to_payload(), indent=2))


def register_commands(cli):
    """Register rules commands with main CLI."""
    cli.add_command(rules_group)
