"""Shared output helpers for CLI commands."""

from decimal import Decimal
from typing import Iterable

import click

from rapprochement.domain.entities import IngestionResult, Transaction, Upload


def format_amount(amount: Decimal | float) -> str:
    """Format an amount with three decimals, the way dinar statements show them."""
    return f"{Decimal(str(amount)):,.3f}"


def echo_transactions(transactions: Iterable[Transaction]) -> None:
    click.echo(f"{'Date':<12} {'Label':<40} {'Amount':>16}")
    click.echo("-" * 70)
    for txn in transactions:
        label = txn.label if len(txn.label) <= 40 else txn.label[:37] + "..."
        click.echo(f"{txn.date:<12} {label:<40} {format_amount(txn.amount):>16}")


def echo_result_summary(result: IngestionResult) -> None:
    click.echo(f"\nTransactions: {len(result)}")
    click.echo(f"Total: {format_amount(result.total)}")
    click.echo(f"Reference balance: {format_amount(result.reference_balance)}")


def echo_upload(upload: Upload) -> None:
    click.echo(f"Upload ID: {upload.upload_id}")
    click.echo(f"  File: {upload.filename}")
    click.echo(f"  Kind: {upload.kind.value}")
    click.echo(f"  Rows: {upload.rows_count}")
    click.echo(f"  Reference balance: {format_amount(upload.reference_balance)}")
