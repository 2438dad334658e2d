"""Reconciliation commands backed by the remote service."""

from typing import Any, Optional

import click

from rapprochement.cli.commands.rules import build_rules, rules_options
from rapprochement.cli.error_handling import handle_domain_error
from rapprochement.cli.formatting import format_amount
from rapprochement.domain.errors import DomainError


@click.command("reconcile")
@click.argument("bank_upload_id")
@click.argument("accounting_upload_id")
@rules_options
@click.pass_context
def reconcile(
    ctx, bank_upload_id: str, accounting_upload_id: str, rules_file: Optional[str], **overrides: Any
):
    """Start reconciling a bank upload against an accounting upload."""
    client = ctx.obj["client"]

    try:
        rules = build_rules(rules_file, **overrides)
        job = client.start_reconciliation(bank_upload_id, accounting_upload_id, rules)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Started reconciliation job {job.job_id} ({job.status})")
    click.echo(f"Use 'results {job.job_id}' to fetch the matches.")


@click.command("results")
@click.argument("job_id")
@click.option("--page", type=int, default=1, show_default=True, help="Results page")
@click.option("--verbose", "-v", is_flag=True, help="List every match and suspense item")
@click.pass_context
def results(ctx, job_id: str, page: int, verbose: bool):
    """Show the results of a reconciliation job."""
    client = ctx.obj["client"]

    try:
        matches_page = client.get_matches(job_id, page=page)
    except DomainError as e:
        handle_domain_error(ctx, e)

    summary = matches_page.summary
    click.echo(f"Job {job_id}")
    click.echo(f"  Bank total: {format_amount(summary.bank_total)}")
    click.echo(f"  Accounting total: {format_amount(summary.accounting_total)}")
    click.echo(f"  Opening balance: {format_amount(summary.opening_balance)}")
    click.echo(f"  Matched: {summary.matched_count}")
    click.echo(f"  In suspense: {summary.suspense_count}")
    click.echo(f"  Coverage: {summary.coverage_ratio:.1%}")
    click.echo(f"  Initial gap: {format_amount(summary.initial_gap)}")
    click.echo(f"  Residual gap: {format_amount(summary.residual_gap)}")
    if summary.ai_assisted_matches is not None:
        click.echo(f"  AI-assisted matches: {summary.ai_assisted_matches}")

    if verbose:
        click.echo("\nMatches:")
        for match in matches_page.matches:
            click.echo(f"  {match.id:<12} {match.rule:<13} {match.score:>5.2f}  {match.status}")
        if matches_page.suspense:
            click.echo("\nSuspense:")
            for item in matches_page.suspense:
                click.echo(f"  {item.type:<12} {item.reason}")

    if matches_page.pagination is not None:
        p = matches_page.pagination
        click.echo(f"\nPage {p.page} of {p.total_pages} ({p.total} matches)")


def register_commands(cli):
    """Register reconciliation commands with main CLI."""
    cli.add_command(reconcile)
    cli.add_command(results)
