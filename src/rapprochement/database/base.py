"""Abstract database interface."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from rapprochement.domain.entities import FileKind, Transaction, Upload


class Database(ABC):
    """Abstract database interface for rapprochement."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Upload operations
    @abstractmethod
    def create_upload(
        self,
        upload_id: str,
        filename: str,
        kind: FileKind,
        reference_balance: Decimal,
        transactions: Sequence[Transaction],
    ) -> int:
        """Store an ingested file with its transactions. Returns upload row ID."""
        pass

    @abstractmethod
    def get_upload(self, upload_id: str) -> Optional[Upload]:
        """Get upload by its public upload ID."""
        pass

    @abstractmethod
    def list_uploads(self, kind: Optional[FileKind] = None) -> list[Upload]:
        """List uploads, newest first, optionally filtered by kind."""
        pass

    @abstractmethod
    def get_upload_transactions(self, upload_id: str) -> list[Transaction]:
        """Get the transactions of an upload in their original order."""
        pass

    @abstractmethod
    def delete_upload(self, upload_id: str) -> None:
        """Delete an upload and its transactions."""
        pass
