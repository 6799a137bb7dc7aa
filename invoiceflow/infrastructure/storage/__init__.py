"""Storage infrastructure implementations."""

from invoiceflow.infrastructure.storage.memory import InMemoryKeyValueMedium
from invoiceflow.infrastructure.storage.persistent_store import PersistentStore
from invoiceflow.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteKeyValueMedium,
)

__all__ = [
    # Media
    "InMemoryKeyValueMedium",
    "SQLiteKeyValueMedium",
    "ConnectionPool",
    # Typed store
    "PersistentStore",
]
