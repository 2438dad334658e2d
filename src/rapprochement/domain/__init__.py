"""Domain layer for rapprochement.

Submodules are imported directly (``rapprochement.domain.statement_parser``,
``rapprochement.domain.upload``...) so that the database layer can depend on
``rapprochement.domain.entities`` without import cycles.
"""
