"""Database layer for rapprochement."""

from rapprochement.database.base import Database
from rapprochement.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
