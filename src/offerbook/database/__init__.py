"""Database layer for offerbook application."""

from offerbook.database.base import Database
from offerbook.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
