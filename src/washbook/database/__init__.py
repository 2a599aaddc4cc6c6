"""Database layer for washbook application."""

from washbook.database.base import Database
from washbook.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
