"""Database layer for ohadabooks application."""

from ohadabooks.database.base import Database, LedgerLineSource
from ohadabooks.database.factories import create_sqlite_database

__all__ = ["Database", "LedgerLineSource", "create_sqlite_database"]
