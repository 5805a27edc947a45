"""Database layer for bulkledger application."""

from bulkledger.database.base import Database
from bulkledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
