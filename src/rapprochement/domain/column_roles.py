"""Header inspection: which column plays which role."""

import logging
from typing import Optional, Sequence

from rapprochement.domain.entities import ColumnRoleMap
from rapprochement.domain.errors import (
    MissingAmountColumnError,
    MissingRequiredColumnError,
)

logger = logging.getLogger(__name__)

# Resolution order matters: a column claimed by an earlier role is not
# offered to later ones.
ROLE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "date": ("date",),
    "label": ("libell", "description"),
    "debit": ("debit", "débit"),
    "credit": ("credit", "crédit"),
    "amount": ("montant",),
    "balance": ("solde",),
}

REQUIRED_ROLES = ("date", "label")
AMOUNT_ROLES = ("debit", "credit", "amount")


def _find_column(
    header: Sequence[str], keywords: tuple[str, ...], claimed: set[int]
) -> Optional[int]:
    for index, name in enumerate(header):
        if index in claimed:
            continue
        if any(keyword in name for keyword in keywords):
            return index
    return None


def resolve_column_roles(header_fields: Sequence[str]) -> ColumnRoleMap:
    """Assign a role to the recognized columns of a header row.

    Each role goes to the first header token that contains one of its
    keywords, compared case-insensitively.

    Args:
        header_fields: Tokens of the header row

    Returns:
        ColumnRoleMap for the file

    Raises:
        MissingRequiredColumnError: If no date or no label column is found
        MissingAmountColumnError: If none of debit, credit or amount is found
    """
    header = [name.strip().lower() for name in header_fields]

    roles: dict[str, Optional[int]] = {}
    claimed: set[int] = set()
    for role, keywords in ROLE_KEYWORDS.items():
        index = _find_column(header, keywords, claimed)
        roles[role] = index
        if index is not None:
            claimed.add(index)

    for role in REQUIRED_ROLES:
        if roles[role] is None:
            raise MissingRequiredColumnError(role)

    if all(roles[role] is None for role in AMOUNT_ROLES):
        raise MissingAmountColumnError()

    logger.debug("Resolved column roles %s from header %s", roles, header)
    return ColumnRoleMap(**roles)
