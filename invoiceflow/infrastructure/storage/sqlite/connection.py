"""
aiosqlite connections for the key-value database.

A small fixed set of connections is opened lazily and handed out through an
``asyncio.Queue``. Every connection runs in WAL mode with ``synchronous=FULL``
so a committed ``set`` survives a crash.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from invoiceflow.config import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = 1

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_entries (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT (datetime('now'))
);
"""


class ConnectionPool:
    """
    Fixed-size pool of connections to one database file.

    The ``kv_entries`` table is created the first time the pool opens and the
    schema version is stamped into ``PRAGMA user_version``.
    """

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 2,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout  # ms

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._opened: list[aiosqlite.Connection] = []
        self._ready = False
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        """Open every connection and make sure the schema exists. Idempotent."""
        async with self._lock:
            if self._ready:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._opened.append(conn)
                self._idle.put_nowait(conn)

            version = await self._migrate(self._opened[0])
            self._ready = True
            logger.info(
                "kv_database_opened",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
                schema_version=version,
            )

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=FULL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    async def _migrate(self, conn: aiosqlite.Connection) -> int:
        cursor = await conn.execute("PRAGMA user_version")
        row = await cursor.fetchone()
        current = row[0] if row else 0
        if current < SCHEMA_VERSION:
            await conn.executescript(SCHEMA)
            await conn.execute(f"PRAGMA user_version={SCHEMA_VERSION}")
            await conn.commit()
            logger.info("kv_schema_migrated", from_version=current, to_version=SCHEMA_VERSION)
        return max(current, SCHEMA_VERSION)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection, opening the pool on first use.

        Usage:
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT ...")
        """
        if not self._ready:
            await self.initialize()

        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; commit when the block exits, roll back if it raises."""
        async with self.acquire() as conn:
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        """Close every connection. The pool reopens on the next ``acquire``."""
        async with self._lock:
            for conn in self._opened:
                await conn.close()
            self._opened.clear()
            self._idle = asyncio.Queue(maxsize=self.pool_size)
            self._ready = False
            logger.info("kv_database_closed", db_path=str(self.db_path))
