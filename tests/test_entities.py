"""Tests for domain entities."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from rapprochement.domain.entities import (
    ColumnRoleMap,
    FileKind,
    IngestionResult,
    Transaction,
    Upload,
)


class TestTransaction:
    """Tests for Transaction entity."""

    def test_transaction_immutability(self):
        """Test that Transaction entities are immutable."""
        txn = Transaction(date="01/01/2024", label="VIREMENT", amount=Decimal("500"))
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            txn.amount = Decimal("0")

    def test_transaction_equality(self):
        """Test Transaction entity equality."""
        txn1 = Transaction(date="01/01/2024", label="A", amount=Decimal("1.50"))
        txn2 = Transaction(date="01/01/2024", label="A", amount=Decimal("1.5"))
        txn3 = Transaction(date="01/01/2024", label="A", amount=Decimal("-1.5"))

        assert txn1 == txn2
        assert txn1 != txn3


class TestColumnRoleMap:
    """Tests for ColumnRoleMap entity."""

    def test_optional_roles_default_to_none(self):
        roles = ColumnRoleMap(date=0, label=1, amount=2)
        assert roles.debit is None
        assert roles.credit is None
        assert roles.balance is None

    def test_same_column_twice_rejected(self):
        """Test that one column cannot carry two roles."""
        with pytest.raises(ValueError):
            ColumnRoleMap(date=0, label=1, debit=2, credit=2)


class TestIngestionResult:
    """Tests for IngestionResult entity."""

    def test_total_and_length(self):
        result = IngestionResult(
            transactions=(
                Transaction(date="01/01/2024", label="A", amount=Decimal("500")),
                Transaction(date="02/01/2024", label="B", amount=Decimal("-25.5")),
            ),
            reference_balance=Decimal("989.25"),
        )
        assert len(result) == 2
        assert result.total == Decimal("474.5")

    def test_empty_result_defaults(self):
        result = IngestionResult(transactions=())
        assert result.total == Decimal("0")
        assert result.reference_balance == Decimal("0")


class TestUpload:
    """Tests for Upload entity."""

    def test_to_handle(self):
        """Test the handle shape shared with the remote service."""
        upload = Upload(
            id=1,
            upload_id="abc123",
            filename="releve.csv",
            kind=FileKind.BANK,
            rows_count=2,
            reference_balance=Decimal("0"),
            created_at=datetime.now(UTC),
        )
        handle = upload.to_handle()
        assert handle.upload_id == "abc123"
        assert handle.filename == "releve.csv"
        assert handle.rows_count == 2
        assert handle.preview == ()
