"""aiosqlite-backed database session."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import aiosqlite


class SQLiteSession:
    """
    DbSessionPort implementation over an aiosqlite connection.

    The connection is owned by whoever created it; closing the session
    is left to them (or to open_sqlite_session).
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    @property
    def connection(self) -> aiosqlite.Connection:
        return self._conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """
        Context manager for database transactions.

        Commits on success. Rolls back on any exception, including
        cancellation and timeouts, so an interrupted write is never left
        pending for the next commit.
        """
        try:
            yield
            await self._conn.commit()
        except BaseException:
            await self._conn.rollback()
            raise

    async def execute(self, sql: str, params: list[Any] | None = None) -> aiosqlite.Cursor:
        """Execute a SQL statement."""
        return await self._conn.execute(sql, params or [])

    async def fetchone(self, sql: str, params: list[Any] | None = None) -> aiosqlite.Row | None:
        """Execute query and fetch one row."""
        cursor = await self.execute(sql, params)
        return await cursor.fetchone()

    async def fetchall(self, sql: str, params: list[Any] | None = None) -> list[aiosqlite.Row]:
        """Execute query and fetch all rows."""
        cursor = await self.execute(sql, params)
        result = await cursor.fetchall()
        return list(result) if result else []


@asynccontextmanager
async def open_sqlite_session(db_path: Path | str) -> AsyncIterator[SQLiteSession]:
    """
    Open an SQLite database and yield a session over it.

    Creates the parent directory if needed. The connection is
    closed when the context exits.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    try:
        await conn.execute("PRAGMA foreign_keys = ON")
        yield SQLiteSession(conn)
    finally:
        await conn.close()
