"""Row and field splitting for delimited exports."""

import re
from typing import Optional

DEFAULT_DELIMITERS = ",;"

_LINE_BREAK = re.compile(r"\r?\n")


def split_rows(text: str) -> list[str]:
    """Split raw file text into its non-blank rows, in file order."""
    return [row for row in _LINE_BREAK.split(text) if row.strip()]


def sniff_delimiter(header_row: str) -> str:
    """Pick the field separator of a file from its header row.

    The more frequent of ``;`` and ``,`` wins. On a tie both stay active,
    which is also how files without a recognizable separator are split.
    """
    semicolons = header_row.count(";")
    commas = header_row.count(",")
    if semicolons > commas:
        return ";"
    if commas > semicolons:
        return ","
    return DEFAULT_DELIMITERS


def split_fields(row: str, delimiters: Optional[str] = DEFAULT_DELIMITERS) -> list[str]:
    """Split a row into trimmed fields.

    Every character of ``delimiters`` acts as a separator at the same time.
    Quotes are not honoured, so a label holding a separator is split in two.

    Args:
        row: One row of the file
        delimiters: Separator characters, ``",;"`` by default

    Returns:
        List of trimmed field strings
    """
    if not delimiters:
        raise ValueError("At least one delimiter is required")
    pattern = "[" + re.escape(delimiters) + "]"
    return [field.strip() for field in re.split(pattern, row)]
