"""SQLite implementation of the durable key-value medium."""

from datetime import UTC, datetime

import aiosqlite

from invoiceflow.config import get_logger
from invoiceflow.core.exceptions import StorageReadError, StorageWriteError
from invoiceflow.core.interfaces.storage import IKeyValueMedium
from invoiceflow.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)


class SQLiteKeyValueMedium(IKeyValueMedium):
    """Key-value medium backed by a single ``kv_entries`` table."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def get(self, key: str) -> str | None:
        """Get the raw value for a key."""
        try:
            async with self._pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT value FROM kv_entries WHERE key = ?", (key,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageReadError(key, str(e)) from e
        if row is None:
            return None
        return row["value"]

    async def set(self, key: str, value: str) -> None:
        """Overwrite a key in its own committed transaction."""
        try:
            async with self._pool.transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO kv_entries (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, datetime.now(UTC).isoformat()),
                )
        except aiosqlite.Error as e:
            logger.error("kv_write_failed", key=key, error=str(e))
            raise StorageWriteError(key, str(e)) from e
        logger.debug("kv_written", key=key, size=len(value))

    async def delete(self, key: str) -> bool:
        """Remove a key."""
        try:
            async with self._pool.transaction() as conn:
                cursor = await conn.execute("DELETE FROM kv_entries WHERE key = ?", (key,))
                deleted = cursor.rowcount > 0
        except aiosqlite.Error as e:
            raise StorageWriteError(key, str(e)) from e
        if deleted:
            logger.info("kv_deleted", key=key)
        return deleted

    async def keys(self) -> list[str]:
        """List stored keys in alphabetical order."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute("SELECT key FROM kv_entries ORDER BY key")
            rows = await cursor.fetchall()
            return [row["key"] for row in rows]

    async def close(self) -> None:
        await self._pool.close()
