"""Tests for header role resolution."""

import itertools

import pytest

from rapprochement.domain.column_roles import resolve_column_roles
from rapprochement.domain.errors import (
    IngestionError,
    MissingAmountColumnError,
    MissingRequiredColumnError,
)


def test_resolve_split_columns():
    """Test a header with separate debit and credit columns."""
    roles = resolve_column_roles(["date", "libelle", "debit", "credit"])
    assert roles.date == 0
    assert roles.label == 1
    assert roles.debit == 2
    assert roles.credit == 3
    assert roles.amount is None
    assert roles.balance is None
    assert roles.uses_split_columns


def test_resolve_accented_and_case_insensitive():
    """Test accented keywords and mixed case."""
    roles = resolve_column_roles(["Date opération", "Libellé", "Débit", "Crédit", "Solde"])
    assert roles.as_dict() == {
        "date": 0,
        "label": 1,
        "debit": 2,
        "credit": 3,
        "amount": None,
        "balance": 4,
    }


def test_resolve_amount_column():
    """Test a header with a single signed amount column."""
    roles = resolve_column_roles(["Date", "Description", "Montant", "Solde"])
    assert roles.amount == 2
    assert roles.balance == 3
    assert not roles.uses_split_columns


def test_first_matching_column_wins():
    """Test that the first header containing a keyword takes the role."""
    roles = resolve_column_roles(["Date opération", "Date valeur", "Libellé", "Montant"])
    assert roles.date == 0


def test_column_never_gets_two_roles():
    """Test that a column claimed by one role is skipped by later roles."""
    roles = resolve_column_roles(["Date", "Description du débit", "Débit", "Crédit"])
    assert roles.label == 1
    assert roles.debit == 2

    roles = resolve_column_roles(["Date", "Libellé", "Montant débit"])
    assert roles.debit == 2
    assert roles.amount is None


def test_header_tokens_are_trimmed():
    """Test that surrounding whitespace in header tokens is ignored."""
    roles = resolve_column_roles(["  DATE ", " Libellé", " Montant "])
    assert (roles.date, roles.label, roles.amount) == (0, 1, 2)


def test_any_permutation_resolves():
    """Test that column order never prevents resolution and indexes follow the header."""
    header = ["Date", "Libellé", "Débit", "Crédit"]
    for permutation in itertools.permutations(header):
        roles = resolve_column_roles(list(permutation))
        assert roles.date == permutation.index("Date")
        assert roles.label == permutation.index("Libellé")
        assert roles.debit == permutation.index("Débit")
        assert roles.credit == permutation.index("Crédit")


def test_missing_label_column():
    """Test that a header without a label column fails."""
    with pytest.raises(MissingRequiredColumnError) as excinfo:
        resolve_column_roles(["date", "x", "y"])
    assert excinfo.value.role == "label"


def test_missing_date_column():
    """Test that a header without a date column fails."""
    with pytest.raises(MissingRequiredColumnError) as excinfo:
        resolve_column_roles(["libellé", "montant"])
    assert excinfo.value.role == "date"


def test_missing_amount_columns():
    """Test that a header without debit, credit or amount fails."""
    with pytest.raises(MissingAmountColumnError):
        resolve_column_roles(["date", "libellé", "solde"])


def test_missing_columns_are_ingestion_errors():
    """Test that resolver failures share the ingestion error base class."""
    with pytest.raises(IngestionError):
        resolve_column_roles(["foo", "bar"])
