"""Database handle that migrations and version adapters run against."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Protocol


class DbSessionPort(Protocol):
    """The caller's database handle, as schemaseq sees it.

    schemaseq never opens, closes, or commits the handle outside of
    ``transaction()``. Migration bodies receive it unchanged, so they
    may use anything the concrete session offers beyond this protocol.
    Binds are positional and use the placeholder syntax of the
    adapter's dialect.
    """

    async def execute(self, sql: str, params: list[Any] | None = None) -> Any:
        """Run one statement.

        Used for DDL in migration bodies (``exec_statements``), for
        creating the version table, and for inserting version records.
        The return value is ignored by schemaseq.
        """
        ...

    async def fetchone(self, sql: str, params: list[Any] | None = None) -> Any | None:
        """Return the first row of a query, or None when it has none.

        The version adapter reads the current version through this, so
        the row must support ``row[0]``.
        """
        ...

    async def fetchall(self, sql: str, params: list[Any] | None = None) -> list[Any]:
        """Return every row of a query.

        Used by ``TableAdapter.history``; rows must support positional
        indexing in select-list order.
        """
        ...

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Scope writes to the version store.

        Must commit when the block exits normally and roll back when it
        exits with any exception, cancellation included.
        """
        yield
