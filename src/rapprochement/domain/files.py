"""Input boundary: which files are accepted and how they are read."""

from pathlib import Path
from typing import Optional, Union

from rapprochement.domain.entities import FileKind, IngestionResult
from rapprochement.domain.errors import ValidationError, unsupported_extension
from rapprochement.domain.statement_parser import parse_statement

ACCEPTED_EXTENSIONS = (".csv", ".pdf", ".xlsx", ".xls", ".png", ".jpg", ".jpeg")
LOCALLY_PARSED_EXTENSIONS = (".csv",)


def check_extension(path: Union[str, Path]) -> str:
    """Return the lower-cased extension of an accepted file.

    Raises:
        ValidationError: If the extension is not accepted
    """
    path = Path(path)
    extension = path.suffix.lower()
    if extension not in ACCEPTED_EXTENSIONS:
        raise ValidationError(unsupported_extension(path.name, ACCEPTED_EXTENSIONS))
    return extension


def is_locally_parseable(path: Union[str, Path]) -> bool:
    """True for files the local engine parses; the rest go to the service."""
    return Path(path).suffix.lower() in LOCALLY_PARSED_EXTENSIONS


def parse_kind(kind: Union[str, FileKind]) -> FileKind:
    """Convert a kind name to FileKind."""
    try:
        return FileKind(kind)
    except ValueError:
        choices = ", ".join(k.value for k in FileKind)
        raise ValidationError(f"Unknown file kind '{kind}'. Expected one of: {choices}")


def read_statement_text(path: Union[str, Path]) -> str:
    """Read a whole export file as UTF-8 text.

    Bytes that are not valid UTF-8, such as Latin-1 accents, are replaced
    with U+FFFD.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    # utf-8-sig drops the byte order mark some spreadsheet tools write
    with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
        return f.read()


def parse_statement_file(path: Union[str, Path], delimiters: Optional[str] = None) -> IngestionResult:
    """Read and parse a local CSV export.

    Raises:
        ValidationError: If the file is not a locally parseable type
        FileNotFoundError: If the file doesn't exist
        IngestionError: If the content cannot be ingested
    """
    check_extension(path)
    if not is_locally_parseable(path):
        raise ValidationError(
            f"'{Path(path).name}' can only be ingested by the reconciliation service"
        )
    return parse_statement(read_statement_text(path), delimiters=delimiters)
