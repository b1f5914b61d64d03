"""Database layer for ledgerly application."""

from ledgerly.database.base import Database
from ledgerly.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
