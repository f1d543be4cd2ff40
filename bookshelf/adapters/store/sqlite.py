"""SQLite key-value slot adapter.

Implements KeyValueSlotPort using SQLite with aiosqlite for async access.
Each slot is one row of a two-column table; writes are upserts.
"""

import asyncio
import logging
from pathlib import Path

import aiosqlite

from bookshelf.core.models import DeserializationError, PersistenceWriteError
from bookshelf.core.ports import KeyValueSlotPort

logger = logging.getLogger(__name__)


class SQLiteKeyValueSlot(KeyValueSlotPort):
    """SQLite-backed key-value slots with connection pooling and async access."""

    def __init__(self, db_path: str, pool_size: int = 2):
        """Initialize SQLite slot storage with connection pooling.

        Args:
            db_path: Path to SQLite database file.
            pool_size: Number of connections to maintain in the pool.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._pool: list[aiosqlite.Connection] = []
        self._pool_lock = asyncio.Lock()
        self._schema_lock = asyncio.Lock()
        self._pool_size = pool_size
        self._schema_initialized = False

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get a connection from the pool or create a new one."""
        async with self._pool_lock:
            if self._pool:
                return self._pool.pop()
        return await aiosqlite.connect(str(self.db_path))

    async def _return_connection(self, conn: aiosqlite.Connection) -> None:
        """Return a connection to the pool."""
        async with self._pool_lock:
            if len(self._pool) < self._pool_size:
                self._pool.append(conn)
                return
        await conn.close()

    async def close_pool(self) -> None:
        """Close all pooled connections."""
        async with self._pool_lock:
            for conn in self._pool:
                await conn.close()
            self._pool.clear()

    async def _init_schema(self) -> None:
        """Initialize database schema on first use.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        async with self._schema_lock:
            if self._schema_initialized:
                return

            conn = await self._get_connection()
            try:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS slots (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
                await conn.commit()
                self._schema_initialized = True
            finally:
                await self._return_connection(conn)

    async def read(self, key: str) -> str | None:
        """Read the value stored under a key, or None if unset."""
        try:
            await self._init_schema()
            conn = await self._get_connection()
            try:
                cursor = await conn.execute(
                    "SELECT value FROM slots WHERE key = ?", (key,)
                )
                row = await cursor.fetchone()
            finally:
                await self._return_connection(conn)
        except aiosqlite.Error as e:
            logger.error(f"Failed to read slot {key} from {self.db_path}: {e}")
            raise DeserializationError(f"SQLite read failed: {e}") from e

        if row is None:
            return None
        value = row[0]
        if not isinstance(value, str):
            raise DeserializationError(
                f"Slot {key!r} holds {type(value).__name__}, expected text"
            )
        return value

    async def write(self, key: str, value: str) -> None:
        """Create or replace the value stored under a key."""
        try:
            await self._init_schema()
            conn = await self._get_connection()
            try:
                await conn.execute(
                    """
                    INSERT INTO slots (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value),
                )
                await conn.commit()
            finally:
                await self._return_connection(conn)
        except aiosqlite.Error as e:
            logger.error(f"Failed to write slot {key} to {self.db_path}: {e}")
            raise PersistenceWriteError(f"SQLite write failed: {e}") from e
