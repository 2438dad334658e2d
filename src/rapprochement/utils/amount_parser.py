"""Amount parsing utilities for French-formatted exports."""

from decimal import Decimal, DecimalException
from typing import Optional
import re

ZERO = Decimal("0")

# Largest decimal exponent of a double; bigger values are not amounts.
MAX_EXPONENT = 308

# Leading decimal literal; trailing text such as a currency code is ignored.
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = re.compile(r"\s+")


def normalize_amount_text(amount_str: str) -> str:
    """Bring a locale-formatted amount to a dot-decimal string.

    The first comma is the decimal separator and every whitespace character,
    including non-breaking spaces used as thousand separators, is dropped:
    ``"1 234,56"`` becomes ``"1234.56"``.
    """
    return _WHITESPACE.sub("", amount_str.replace(",", ".", 1))


def parse_amount(amount_str: Optional[str]) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "-123,45"
    - "1 234,56"
    - "12,500 TND" (trailing text after the number is ignored)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If no number can be read from the string, or its
            magnitude is beyond MAX_EXPONENT
    """
    if amount_str is None or not amount_str.strip():
        raise ValueError("Empty amount string")

    normalized = normalize_amount_text(amount_str)
    match = _NUMBER_PREFIX.match(normalized)
    if match is None:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    try:
        value = Decimal(match.group(0))
    except DecimalException:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if value.adjusted() > MAX_EXPONENT:
        raise ValueError(f"Amount out of range '{amount_str}'")
    return value


def parse_amount_or_zero(amount_str: Optional[str]) -> Decimal:
    """Parse an amount string, falling back to zero.

    Empty, missing and malformed values all count as ``0`` so that one dirty
    field never stops an import.
    """
    try:
        return parse_amount(amount_str)
    except ValueError:
        return ZERO
