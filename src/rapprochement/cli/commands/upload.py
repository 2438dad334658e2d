"""Upload commands: ingest files and manage the local registry."""

import click

from rapprochement.cli.commands.parse import delimiters_option
from rapprochement.cli.error_handling import handle_domain_error
from rapprochement.cli.formatting import (
    echo_result_summary,
    echo_transactions,
    echo_upload,
    format_amount,
)
from rapprochement.domain.entities import FileKind
from rapprochement.domain.errors import DomainError
from rapprochement.domain.upload import UploadService

KIND_CHOICE = click.Choice([k.value for k in FileKind])


@click.command("upload")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--kind", type=KIND_CHOICE, required=True, help="Bank statement or accounting journal")
@click.option(
    "--remote",
    is_flag=True,
    default=False,
    help="Send the file to the reconciliation service instead of parsing it locally",
)
@delimiters_option
@click.pass_context
def upload_file(ctx, file: str, kind: str, remote: bool, delimiters: str | None):
    """Ingest an export file and print its upload handle."""
    if remote:
        client = ctx.obj["client"]
        try:
            handle = client.upload_file(file, kind)
        except (DomainError, OSError) as e:
            handle_domain_error(ctx, e)
        click.echo(f"Upload ID: {handle.upload_id}")
        click.echo(f"  File: {handle.filename}")
        click.echo(f"  Rows: {handle.rows_count}")
        return

    service = UploadService(ctx.obj["db"])
    try:
        upload = service.ingest_file(file, kind, delimiters=delimiters)
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)
    echo_upload(upload)


@click.group("uploads")
def uploads_group():
    """Manage locally ingested files."""
    pass


@uploads_group.command("list")
@click.option("--kind", type=KIND_CHOICE, help="Only show this kind of file")
@click.pass_context
def list_uploads(ctx, kind: str | None):
    """List stored uploads, newest first."""
    service = UploadService(ctx.obj["db"])
    uploads = service.list_uploads(kind=kind)

    if not uploads:
        click.echo("No uploads found.")
        return

    click.echo(f"{'Upload ID':<34} {'Kind':<11} {'Rows':>6} {'Balance':>16}  File")
    click.echo("-" * 90)
    for upload in uploads:
        click.echo(
            f"{upload.upload_id:<34} {upload.kind.value:<11} {upload.rows_count:>6} "
            f"{format_amount(upload.reference_balance):>16}  {upload.filename}"
        )


@uploads_group.command("show")
@click.argument("upload_id")
@click.pass_context
def show_upload(ctx, upload_id: str):
    """Show an upload with its transactions."""
    service = UploadService(ctx.obj["db"])
    try:
        upload = service.get_upload(upload_id)
        result = service.get_result(upload_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    echo_upload(upload)
    click.echo("")
    echo_transactions(result.transactions)
    echo_result_summary(result)


@uploads_group.command("delete")
@click.argument("upload_id")
@click.confirmation_option(prompt="Delete this upload and its transactions?")
@click.pass_context
def delete_upload(ctx, upload_id: str):
    """Delete a stored upload."""
    service = UploadService(ctx.obj["db"])
    try:
        service.delete_upload(upload_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted upload {upload_id}")


def register_commands(cli):
    """Register upload commands with main CLI."""
    cli.add_command(upload_file)
    cli.add_command(uploads_group)
