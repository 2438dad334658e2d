"""Local statement parsing command."""

import click

from rapprochement.cli.error_handling import handle_domain_error
from rapprochement.cli.formatting import echo_result_summary, echo_transactions
from rapprochement.domain.errors import DomainError
from rapprochement.domain.files import parse_statement_file


def _check_delimiters(ctx, param, value):
    if value is not None and not value:
        raise click.BadParameter("at least one separator character is required")
    return value


delimiters_option = click.option(
    "--delimiters",
    default=None,
    callback=_check_delimiters,
    help="Field separator characters, all recognized at once (detected from the header by default)",
)


@click.command("parse")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@delimiters_option
@click.pass_context
def parse_file(ctx, csv_file: str, delimiters: str | None):
    """Parse a CSV export and print its transactions."""
    try:
        result = parse_statement_file(csv_file, delimiters=delimiters)
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)

    if result.transactions:
        echo_transactions(result.transactions)
    else:
        click.echo("No transactions found.")
    echo_result_summary(result)


def register_commands(cli):
    """Register parse command with main CLI."""
    cli.add_command(parse_file)
