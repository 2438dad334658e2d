"""Mapper functions to convert between domain models and SQLAlchemy models."""

from decimal import Decimal

from rapprochement.domain import entities as domain
from rapprochement.database.models import (
    Upload as ORMUpload,
    UploadedTransaction as ORMUploadedTransaction,
)


def upload_to_domain(orm_upload: ORMUpload) -> domain.Upload:
    """Convert SQLAlchemy Upload model to domain Upload entity."""
    return domain.Upload(
        id=orm_upload.id,
        upload_id=orm_upload.upload_id,
        filename=orm_upload.filename,
        kind=domain.FileKind(orm_upload.kind),
        rows_count=orm_upload.rows_count,
        reference_balance=Decimal(orm_upload.reference_balance),
        created_at=orm_upload.created_at,
    )


def transaction_to_domain(orm_transaction: ORMUploadedTransaction) -> domain.Transaction:
    """Convert SQLAlchemy UploadedTransaction model to domain Transaction entity."""
    return domain.Transaction(
        date=orm_transaction.date,
        label=orm_transaction.label,
        amount=Decimal(orm_transaction.amount),
    )
