"""Database layer for homeledger application."""

from homeledger.database.base import Database
from homeledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
