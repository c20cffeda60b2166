"""Shared pytest fixtures for schemaseq tests."""

import io
from collections.abc import AsyncIterator, Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from loguru import logger

from schemaseq.storage.sqlite_session import SQLiteSession, open_sqlite_session


@dataclass
class QueryLog:
    """A statement issued through RecordingSession."""

    sql: str
    params: list[Any] | None = None


@dataclass
class RecordingSession:
    """
    DbSessionPort fake that records every statement.

    ``version`` is returned by fetchone as a single-column row, or no row
    when None. ``exec_error`` is raised by execute for any statement
    containing ``fail_on`` (or every statement when ``fail_on`` is None).
    """

    version: int | None = None
    exec_error: Exception | None = None
    fail_on: str | None = None
    query_error: Exception | None = None
    exec_logs: list[QueryLog] = field(default_factory=list)
    query_logs: list[QueryLog] = field(default_factory=list)
    commits: int = 0
    rollbacks: int = 0

    async def execute(self, sql: str, params: list[Any] | None = None) -> None:
        if self.exec_error is not None and (self.fail_on is None or self.fail_on in sql):
            raise self.exec_error
        self.exec_logs.append(QueryLog(sql, params))

    async def fetchone(self, sql: str, params: list[Any] | None = None) -> tuple[int] | None:
        if self.query_error is not None:
            raise self.query_error
        self.query_logs.append(QueryLog(sql, params))
        return None if self.version is None else (self.version,)

    async def fetchall(self, sql: str, params: list[Any] | None = None) -> list[Any]:
        if self.query_error is not None:
            raise self.query_error
        self.query_logs.append(QueryLog(sql, params))
        return []

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            yield
            self.commits += 1
        except BaseException:
            self.rollbacks += 1
            raise

    def reset(self) -> None:
        self.exec_logs.clear()
        self.query_logs.clear()
        self.commits = 0
        self.rollbacks = 0

    @property
    def inserts(self) -> list[list[Any] | None]:
        """Params of every INSERT issued, in order."""
        return [log.params for log in self.exec_logs if log.sql.lstrip().startswith("INSERT")]


@pytest.fixture
def recording_session() -> RecordingSession:
    """Provide a fresh RecordingSession."""
    return RecordingSession()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def sqlite_session(temp_db_path: Path) -> AsyncIterator[SQLiteSession]:
    """Provide an SQLiteSession over a fresh database file."""
    async with open_sqlite_session(temp_db_path) as session:
        yield session


@pytest.fixture
def log_capture() -> Generator[io.StringIO, None, None]:
    """Capture loguru output (including schemaseq's own records) to a buffer."""
    string_io = io.StringIO()
    logger.enable("schemaseq")
    handler_id = logger.add(string_io, format="{level}|{message}", level="DEBUG")
    yield string_io
    logger.remove(handler_id)
    logger.disable("schemaseq")


class LogRecorder:
    """LogFunc that keeps formatted messages."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str, *args: Any) -> None:
        self.messages.append(message.format(*args))


@pytest.fixture
def log_recorder() -> LogRecorder:
    """Provide a recording log sink."""
    return LogRecorder()
