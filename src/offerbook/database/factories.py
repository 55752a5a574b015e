"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from offerbook.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks OFFERBOOK_DB_PATH
            environment variable, then defaults to ~/.offerbook/offerbook.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("OFFERBOOK_DB_PATH")

    if database_path is None:
        # Default to ~/.offerbook/offerbook.db
        home = Path.home()
        db_dir = home / ".offerbook"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "offerbook.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_database(
    database_url: Optional[str] = None, database_path: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a database from a SQLAlchemy URL, falling back to SQLite.

    Args:
        database_url: Any SQLAlchemy URL (e.g. a hosted PostgreSQL backend).
            If None, checks OFFERBOOK_DATABASE_URL environment variable.
        database_path: SQLite file used when no URL is configured

    Returns:
        SQLAlchemyDatabase instance
    """
    if database_url is None:
        database_url = os.environ.get("OFFERBOOK_DATABASE_URL")

    if database_url:
        return SQLAlchemyDatabase(database_url)
    return create_sqlite_database(database_path=database_path)
