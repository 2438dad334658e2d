"""Utility functions for rapprochement."""

from rapprochement.utils.amount_parser import parse_amount, parse_amount_or_zero
from rapprochement.utils.tokenizer import sniff_delimiter, split_fields, split_rows

__all__ = [
    "parse_amount",
    "parse_amount_or_zero",
    "sniff_delimiter",
    "split_fields",
    "split_rows",
]
