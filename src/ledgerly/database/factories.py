"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerly.database.sqlalchemy_db import SQLAlchemyDatabase


def create_database(database_url: str) -> SQLAlchemyDatabase:
    """Create a database instance for any supported SQLAlchemy URL."""
    return SQLAlchemyDatabase(database_url)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERLY_DB_PATH
            environment variable, then defaults to ~/.ledgerly/ledgerly.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("LEDGERLY_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".ledgerly"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ledgerly.db")

    return create_database(f"sqlite:///{database_path}")
