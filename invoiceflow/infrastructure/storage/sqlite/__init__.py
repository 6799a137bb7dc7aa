"""SQLite storage implementations."""

from invoiceflow.infrastructure.storage.sqlite.connection import ConnectionPool
from invoiceflow.infrastructure.storage.sqlite.kv_store import SQLiteKeyValueMedium

__all__ = [
    "ConnectionPool",
    "SQLiteKeyValueMedium",
]
