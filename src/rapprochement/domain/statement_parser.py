"""Statement ingestion engine.

Turns the full text of a bank statement or accounting journal export into an
ordered sequence of canonical transactions and a reference balance:

    raw text -> rows -> separator + header roles -> per-row extraction + balance tracking

The field separator is the more frequent of ``;`` and ``,`` in the header row.

Structural problems (empty file, no data row, unrecognizable header) abort the
parse with an ``IngestionError``. Row-level problems never do: a malformed
number counts as zero and a row without date or label is dropped.
"""

import logging
from decimal import Decimal
from typing import Optional, Sequence

from rapprochement.domain.column_roles import resolve_column_roles
from rapprochement.domain.entities import ColumnRoleMap, IngestionResult, Transaction
from rapprochement.domain.errors import EmptyFileError, InsufficientRowsError
from rapprochement.utils.amount_parser import ZERO, parse_amount, parse_amount_or_zero
from rapprochement.utils.tokenizer import sniff_delimiter, split_fields, split_rows

logger = logging.getLogger(__name__)


def _field(fields: Sequence[str], index: Optional[int]) -> str:
    """Return the field at ``index``, or an empty string when absent."""
    if index is None or index >= len(fields):
        return ""
    return fields[index]


def extract_row(fields: Sequence[str], roles: ColumnRoleMap) -> Optional[Transaction]:
    """Build a transaction from one data row.

    Args:
        fields: Tokens of the data row
        roles: Column roles resolved from the header

    Returns:
        Transaction, or None when the row has no date or no label
    """
    date = _field(fields, roles.date).strip()
    label = _field(fields, roles.label).replace('"', "").strip()
    if not date or not label:
        return None

    if roles.amount is not None:
        amount = parse_amount_or_zero(_field(fields, roles.amount))
    else:
        credit = parse_amount_or_zero(_field(fields, roles.credit))
        debit = parse_amount_or_zero(_field(fields, roles.debit))
        amount = credit - debit

    return Transaction(date=date, label=label, amount=amount)


class BalanceTracker:
    """Remember the last readable value of the balance column."""

    def __init__(self, index: Optional[int]):
        self.index = index
        self.value: Decimal = ZERO

    def observe(self, fields: Sequence[str]) -> None:
        """Read the balance field of a row, keeping the old value if unreadable."""
        if self.index is None:
            return
        raw = _field(fields, self.index)
        try:
            self.value = parse_amount(raw)
        except ValueError:
            logger.debug("Ignoring unreadable balance value %r", raw)


def parse_statement(text: Optional[str], delimiters: Optional[str] = None) -> IngestionResult:
    """Parse the full text of an export file.

    Args:
        text: File content, already decoded
        delimiters: Field separators; detected from the header row when None

    Returns:
        IngestionResult with transactions in row order and the last valid
        balance-column value (``0`` without a balance column)

    Raises:
        EmptyFileError: If the text is empty or missing
        InsufficientRowsError: If there is no data row after the header
        MissingRequiredColumnError: If the header lacks date or label
        MissingAmountColumnError: If the header lacks every amount column
    """
    if not text:
        raise EmptyFileError()

    rows = split_rows(text)
    if len(rows) < 2:
        raise InsufficientRowsError()

    if delimiters is None:
        delimiters = sniff_delimiter(rows[0])
        logger.debug("Detected field separator %r", delimiters)
    roles = resolve_column_roles(split_fields(rows[0], delimiters))
    tracker = BalanceTracker(roles.balance)

    transactions: list[Transaction] = []
    skipped = 0
    for row_num, row in enumerate(rows[1:], start=2):  # header is row 1
        fields = split_fields(row, delimiters)
        transaction = extract_row(fields, roles)
        if transaction is None:
            skipped += 1
            logger.debug("Row %d: missing date or label, skipped", row_num)
        else:
            transactions.append(transaction)
        tracker.observe(fields)

    logger.info(
        "Parsed %d transactions (%d rows skipped), reference balance %s",
        len(transactions),
        skipped,
        tracker.value,
    )
    return IngestionResult(transactions=tuple(transactions), reference_balance=tracker.value)
