from __future__ import annotations

import asyncio
import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

import aiosqlite

from ..core.timeutil import now_utc
from ..domain.errors import KeyMissing, StoreUnavailable, store_error_from

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Fixed-size pool of aiosqlite connections with bounded checkout."""

    def __init__(self, path: str, size: int = 4, timeout: float = 5.0) -> None:
        if size < 1:
            raise ValueError("Pool size must be at least 1")
        self._path = path
        self._size = size
        self._timeout = timeout
        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._all: List[aiosqlite.Connection] = []

    @property
    def size(self) -> int:
        return self._size

    async def open(self) -> None:
        for _ in range(self._size - len(self._all)):
            conn = await aiosqlite.connect(self._path)
            try:
                # PRAGMA journal_mode returns a row; an unread cursor keeps the db locked
                async with conn.execute("PRAGMA journal_mode=WAL") as cur:
                    await cur.fetchall()
            except BaseException:
                await conn.close()
                raise
            self._all.append(conn)
            self._idle.put_nowait(conn)
        logger.info("Store pool opened (path=%s size=%d)", self._path, self._size)

    async def close(self) -> None:
        """Close every connection, waiting up to the checkout timeout for borrowed ones."""
        conns = list(self._all)
        returned = 0
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._timeout
        while returned < len(conns):
            try:
                await asyncio.wait_for(self._idle.get(), timeout=max(0.0, deadline - loop.time()))
            except asyncio.TimeoutError:
                logger.warning(
                    "Closing store pool with %d connection(s) still in use", len(conns) - returned
                )
                break
            returned += 1
        self._all = []
        while not self._idle.empty():
            self._idle.get_nowait()
        for conn in conns:
            await conn.close()
        if conns:
            logger.info("Store pool closed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        try:
            conn = await asyncio.wait_for(self._idle.get(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise store_error_from(e) from e
        try:
            yield conn
        except ValueError as e:
            # aiosqlite raises ValueError once the connection has been closed under us
            if conn not in self._all:
                raise StoreUnavailable(f"Store connection closed: {e}") from e
            raise
        finally:
            # not re-queued once the pool has been closed
            if conn in self._all:
                self._idle.put_nowait(conn)


class SQLiteKeyValueStore:
    """Sensor values as plain strings in a SQLite table, one row per key."""

    def __init__(self, path: str, pool_size: int = 4, pool_timeout: float = 5.0) -> None:
        self._pool = ConnectionPool(path, size=pool_size, timeout=pool_timeout)

    async def open(self) -> None:
        try:
            await self._pool.open()
            async with self._pool.connection() as db:
                await db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS sensor_values (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
                await db.commit()
        except BaseException as e:
            await self._pool.close()
            if isinstance(e, (sqlite3.Error, OSError)):
                raise store_error_from(e) from e
            raise

    async def close(self) -> None:
        await self._pool.close()

    async def get(self, key: str) -> str:
        async with self._pool.connection() as db:
            try:
                async with db.execute("SELECT value FROM sensor_values WHERE key = ?", (key,)) as cur:
                    row = await cur.fetchone()
            except (sqlite3.Error, OSError) as e:
                raise store_error_from(e, key=key) from e
        if row is None:
            raise KeyMissing(f"No value stored for key '{key}'", key=key)
        return row[0]

    async def set(self, key: str, value: str) -> None:
        async with self._pool.connection() as db:
            try:
                await db.execute(
                    "INSERT INTO sensor_values(key, value, updated_at) VALUES (?, ?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
                    (key, value, now_utc().isoformat()),
                )
                await db.commit()
            except (sqlite3.Error, OSError) as e:
                raise store_error_from(e, key=key) from e
