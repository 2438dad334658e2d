"""Domain model entities for rapprochement.

These are pure data classes representing the ingestion concepts, independent
of the database schema and of the remote reconciliation service.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class FileKind(str, Enum):
    """Which side of the reconciliation a file belongs to."""

    BANK = "bank"
    ACCOUNTING = "accounting"


@dataclass(frozen=True)
class Transaction:
    """Canonical transaction extracted from one data row.

    ``date`` is kept exactly as found in the source file. ``amount`` is
    positive for a credit (inflow) and negative for a debit (outflow).
    """

    date: str
    label: str
    amount: Decimal


@dataclass(frozen=True)
class ColumnRoleMap:
    """Column index assigned to each semantic role of a header row."""

    date: int
    label: int
    debit: Optional[int] = None
    credit: Optional[int] = None
    amount: Optional[int] = None
    balance: Optional[int] = None

    def __post_init__(self):
        assigned = [index for index in self.as_dict().values() if index is not None]
        if len(assigned) != len(set(assigned)):
            raise ValueError(f"A column cannot carry two roles: {self.as_dict()}")

    def as_dict(self) -> dict[str, Optional[int]]:
        """Return the role map as ``{role: index}``."""
        return {
            "date": self.date,
            "label": self.label,
            "debit": self.debit,
            "credit": self.credit,
            "amount": self.amount,
            "balance": self.balance,
        }

    @property
    def uses_split_columns(self) -> bool:
        """True when amounts come from separate debit/credit columns."""
        return self.amount is None


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of parsing one statement or journal export."""

    transactions: tuple[Transaction, ...]
    reference_balance: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        """Sum of all transaction amounts."""
        return sum((t.amount for t in self.transactions), Decimal("0"))

    def __len__(self) -> int:
        return len(self.transactions)


@dataclass(frozen=True)
class UploadHandle:
    """Reference to an ingested file, as returned by the upload endpoints."""

    upload_id: str
    filename: str
    rows_count: int
    preview: tuple = ()


@dataclass(frozen=True)
class Upload:
    """Upload domain entity stored in the local registry."""

    id: int
    upload_id: str
    filename: str
    kind: FileKind
    rows_count: int
    reference_balance: Decimal
    created_at: datetime

    def to_handle(self) -> UploadHandle:
        """Return the same handle shape the remote service hands back."""
        return UploadHandle(
            upload_id=self.upload_id,
            filename=self.filename,
            rows_count=self.rows_count,
        )
