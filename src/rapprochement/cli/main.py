"""Main CLI entry point."""

import click

from rapprochement.client.api_client import DEFAULT_BASE_URL, ReconciliationClient
from rapprochement.database.factories import create_sqlite_database
from rapprochement.logging_setup import configure_logging

# Import and register all commands at module level
from rapprochement.cli.commands import (
    parse,
    upload,
    rules,
    reconcile,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides RAPPROCHEMENT_DB_PATH environment variable)",
    envvar="RAPPROCHEMENT_DB_PATH",
)
@click.option(
    "--api-url",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="Reconciliation service URL (or RAPPROCHEMENT_API_URL)",
    envvar="RAPPROCHEMENT_API_URL",
)
@click.option(
    "--api-token",
    help="Bearer token for the reconciliation service (or RAPPROCHEMENT_API_TOKEN)",
    envvar="RAPPROCHEMENT_API_TOKEN",
)
@click.option(
    "--log-level",
    help="Logging level, e.g. INFO or DEBUG (or RAPPROCHEMENT_LOG_LEVEL)",
    envvar="RAPPROCHEMENT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, api_url: str, api_token: str | None, log_level: str | None):
    """Rapprochement - bank reconciliation ingestion tool.

    Parse French bank statement and accounting journal exports into
    canonical transactions, keep them locally, and submit them to the
    reconciliation service.
    """
    ctx.ensure_object(dict)

    # Set up shared resources only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            configure_logging(log_level)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--log-level")

        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)

        if "client" not in ctx.obj:
            ctx.obj["client"] = ReconciliationClient(base_url=api_url, token=api_token)


# Register all commands
parse.register_commands(cli)
upload.register_commands(cli)
rules.register_commands(cli)
reconcile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
