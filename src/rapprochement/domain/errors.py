"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class IngestionError(DomainError):
    """Structural failure that aborts a statement parse.

    The message is meant for the end user and is shown verbatim.
    """


class EmptyFileError(IngestionError):
    """The file has no readable content."""

    def __init__(self) -> None:
        super().__init__("Le fichier est vide.")


class InsufficientRowsError(IngestionError):
    """The file lacks a header row plus at least one data row."""

    def __init__(self) -> None:
        super().__init__(
            "Le fichier CSV doit contenir au moins un en-tête et une ligne de données."
        )


class MissingRequiredColumnError(IngestionError):
    """The header has no recognizable date or label column."""

    def __init__(self, role: str) -> None:
        self.role = role
        super().__init__(
            f"Colonne obligatoire introuvable : '{role}'. "
            "Les colonnes 'date' et 'libellé' sont requises."
        )


class MissingAmountColumnError(IngestionError):
    """The header has none of the debit, credit or amount columns."""

    def __init__(self) -> None:
        super().__init__(
            "Impossible de trouver les colonnes de montant ('débit'/'crédit' ou 'montant')."
        )


def upload_not_found(upload_id: str) -> str:
    """Return message for missing upload."""
    return f"Upload '{upload_id}' not found"


def unsupported_extension(filename: str, accepted: tuple[str, ...]) -> str:
    """Return message for a file the service does not accept."""
    return (
        f"Unsupported file type for '{filename}'. "
        f"Accepted extensions: {', '.join(accepted)}"
    )
