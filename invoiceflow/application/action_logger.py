"""Append-only, size-bounded audit trail."""

from typing import Any

from invoiceflow.config import get_logger
from invoiceflow.core.entities.action_log import ActionLogEntry
from invoiceflow.infrastructure.storage.persistent_store import PersistentStore

logger = get_logger(__name__)

INITIALIZED_ACTION = "Application Initialized / Loaded"


class ActionLogger:
    """
    Records domain events, most recent first.

    The stored log never holds more than ``limit`` entries; the oldest are
    dropped silently on overflow. Concurrent writers are not coordinated.
    """

    def __init__(self, store: PersistentStore[list[ActionLogEntry]], limit: int = 100):
        self._store = store
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    async def log_action(self, action: str, details: Any = None) -> ActionLogEntry:
        """Prepend a new entry, truncate to the limit and persist."""
        entry = ActionLogEntry(action=action, details=details)

        async def prepend(entries: list[ActionLogEntry]) -> list[ActionLogEntry]:
            return [entry, *entries][: self._limit]

        await self._store.mutate(prepend)
        logger.info("action_logged", action=action, entry_id=entry.id)
        return entry

    async def entries(self) -> list[ActionLogEntry]:
        """All entries, most recent first."""
        return await self._store.read()

    async def clear(self) -> bool:
        """Drop every entry by deleting the stored log."""
        cleared = await self._store.reset()
        logger.warning("action_log_cleared", had_entries=cleared)
        return cleared

    async def bootstrap(self) -> ActionLogEntry | None:
        """Log the initialization event, only if the log is empty."""
        entry = ActionLogEntry(action=INITIALIZED_ACTION)

        async def seed(entries: list[ActionLogEntry]) -> list[ActionLogEntry]:
            return entries if entries else [entry]

        stored = await self._store.mutate(seed)
        if stored[0].id != entry.id:
            return None
        logger.info("action_logged", action=entry.action, entry_id=entry.id)
        return entry
