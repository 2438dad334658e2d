"""Upload domain service: local ingestion with a persistent registry."""

import logging
import uuid
from pathlib import Path
from typing import Optional, Union

from rapprochement.database.base import Database
from rapprochement.domain.entities import FileKind, IngestionResult, Upload
from rapprochement.domain.errors import NotFoundError, upload_not_found
from rapprochement.domain.files import parse_kind, parse_statement_file

logger = logging.getLogger(__name__)


class UploadService:
    """Service for ingesting export files and keeping their results."""

    def __init__(self, db: Database):
        """Initialize upload service.

        Args:
            db: Database instance
        """
        self.db = db

    def ingest_file(
        self,
        file_path: Union[str, Path],
        kind: Union[str, FileKind],
        delimiters: Optional[str] = None,
    ) -> Upload:
        """Parse a CSV export and store the result.

        Args:
            file_path: Path to the export file
            kind: Bank statement or accounting journal
            delimiters: Field separators; detected from the header when None

        Returns:
            Stored upload entity

        Raises:
            ValidationError: If the kind or file type is not accepted
            FileNotFoundError: If the file doesn't exist
            IngestionError: If the file cannot be ingested
        """
        file_kind = parse_kind(kind)
        path = Path(file_path)
        result = parse_statement_file(path, delimiters=delimiters)

        upload_id = uuid.uuid4().hex
        self.db.create_upload(
            upload_id=upload_id,
            filename=path.name,
            kind=file_kind,
            reference_balance=result.reference_balance,
            transactions=result.transactions,
        )
        logger.info(
            "Stored %s upload %s (%s, %d transactions)",
            file_kind.value,
            upload_id,
            path.name,
            len(result),
        )
        return self.get_upload(upload_id)

    def get_upload(self, upload_id: str) -> Upload:
        """Get an upload by ID.

        Raises:
            NotFoundError: If the upload doesn't exist
        """
        upload = self.db.get_upload(upload_id)
        if upload is None:
            raise NotFoundError(upload_not_found(upload_id))
        return upload

    def list_uploads(self, kind: Optional[Union[str, FileKind]] = None) -> list[Upload]:
        """List stored uploads, newest first."""
        file_kind = parse_kind(kind) if kind is not None else None
        return self.db.list_uploads(kind=file_kind)

    def get_result(self, upload_id: str) -> IngestionResult:
        """Rebuild the ingestion result of a stored upload.

        Raises:
            NotFoundError: If the upload doesn't exist
        """
        upload = self.get_upload(upload_id)
        transactions = self.db.get_upload_transactions(upload_id)
        return IngestionResult(
            transactions=tuple(transactions),
            reference_balance=upload.reference_balance,
        )

    def delete_upload(self, upload_id: str) -> None:
        """Delete a stored upload.

        Raises:
            NotFoundError: If the upload doesn't exist
        """
        self.get_upload(upload_id)
        self.db.delete_upload(upload_id)
